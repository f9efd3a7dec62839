"""Resource attribute schemas: configuration validation and planning.

A schema lists the attributes of a resource. Configuration and state are
plain dicts keyed by attribute name; nested blocks are nested dicts.

Planning follows the usual declarative rules: configured values win,
unset attributes take their default, unset computed attributes become
``UNKNOWN`` until the apply fills them in, and each attribute's plan
modifiers get the final word.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .diagnostics import Diagnostics


class _Unknown:
    """Sentinel for values that are only known after apply."""
    
    _instance = None
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance
    
    def __repr__(self) -> str:
        return "<unknown>"
    
    def __bool__(self) -> bool:
        return False


UNKNOWN = _Unknown()

_KIND_TYPES = {
    "string": (str,),
    "bool": (bool,),
    "int": (int,),
    "float": (int, float),
    "list": (list, tuple),
    "set": (list, tuple, set, frozenset),
    "object": (dict,),
    "map": (dict,),
}


def is_known(value: Any) -> bool:
    """True for values that are neither null nor unknown."""
    return value is not None and value is not UNKNOWN


def known(value: Any, default: Any = None) -> Any:
    """Return value, or default when it is null or unknown."""
    return value if is_known(value) else default


@dataclass
class PlanRequest:
    """Input handed to a plan modifier for one attribute."""
    path: str
    config_value: Any
    plan_value: Any
    state_value: Any
    state_exists: bool


@dataclass
class PlanResult:
    plan_value: Any
    requires_replace: bool = False


PlanModifier = Callable[[PlanRequest], PlanResult]
Validator = Callable[[Any], None]


@dataclass
class Attribute:
    name: str
    kind: str = "string"
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    default: Any = None
    validators: Sequence[Validator] = ()
    plan_modifiers: Sequence[PlanModifier] = ()
    attributes: Sequence["Attribute"] = ()
    description: str = ""


@dataclass
class Plan:
    values: Dict[str, Any]
    requires_replace: List[str] = field(default_factory=list)
    
    def unknown_attributes(self) -> List[str]:
        return sorted(name for name, value in self.values.items() if value is UNKNOWN)


@dataclass
class Schema:
    attributes: Sequence[Attribute]
    version: int = 0
    description: str = ""
    
    def attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None
    
    def validate(self, config: Dict[str, Any], prefix: str = "") -> Diagnostics:
        """Validate a configuration against the schema.
        
        Args:
            config: Attribute values as declared by the operator
            prefix: Path prefix for nested blocks (used internally)
            
        Returns:
            Diagnostics (empty when valid)
        """
        diags = Diagnostics()
        known_names = {attr.name for attr in self.attributes}
        for name in sorted(set(config) - known_names):
            diags.add_error("Unsupported argument", f'An argument named "{name}" is not expected here.', prefix + name)
        
        for attr in self.attributes:
            path = prefix + attr.name
            value = config.get(attr.name)
            if value is None:
                if attr.required:
                    diags.add_error("Missing required argument", f'The argument "{path}" is required, but no definition was found.', path)
                continue
            if attr.computed and not attr.optional and not attr.required:
                diags.add_error("Invalid Configuration for Read-Only Attribute", f'Cannot set value for "{path}"; it is computed by the provider.', path)
                continue
            if value is UNKNOWN:
                continue
            if not isinstance(value, _KIND_TYPES[attr.kind]) or (attr.kind in ("int", "float") and isinstance(value, bool)):
                diags.add_error("Incorrect attribute value type", f'Inappropriate value for attribute "{path}": {attr.kind} required.', path)
                continue
            for validator in attr.validators:
                try:
                    validator(value)
                except ValueError as exc:
                    diags.add_error("Invalid Attribute Value", str(exc), path)
            if attr.attributes and isinstance(value, dict):
                diags.extend(Schema(attr.attributes).validate(value, prefix=f"{path}."))
        return diags
    
    def plan(
        self,
        config: Dict[str, Any],
        state: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> Plan:
        """Compute the planned values for a configuration.
        
        Args:
            config: Declared attribute values
            state: Prior state, or None when the resource does not exist yet
            
        Returns:
            Plan with values and the attributes that force replacement
        """
        values: Dict[str, Any] = {}
        requires_replace: List[str] = []
        state_exists = state is not None
        prior = state or {}
        
        for attr in self.attributes:
            path = prefix + attr.name
            config_value = config.get(attr.name)
            state_value = prior.get(attr.name)
            
            if attr.attributes and isinstance(config_value, dict):
                nested = Schema(attr.attributes).plan(
                    config_value,
                    state_value if isinstance(state_value, dict) else None,
                    prefix=f"{path}.",
                )
                plan_value = nested.values
                requires_replace.extend(nested.requires_replace)
            elif config_value is None:
                if attr.default is not None:
                    plan_value = attr.default
                elif attr.computed:
                    plan_value = UNKNOWN
                else:
                    plan_value = None
            else:
                plan_value = config_value
            
            for modifier in attr.plan_modifiers:
                result = modifier(PlanRequest(path, config_value, plan_value, state_value, state_exists))
                plan_value = result.plan_value
                if result.requires_replace and path not in requires_replace:
                    requires_replace.append(path)
            values[attr.name] = plan_value
        
        return Plan(values=values, requires_replace=requires_replace)
    
    def redact(self, state: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of state with sensitive values masked, for display."""
        redacted = {}
        for name, value in state.items():
            attr = self.attribute(name)
            if attr is not None and attr.sensitive and is_known(value):
                redacted[name] = "(sensitive value)"
            elif attr is not None and attr.attributes and isinstance(value, dict):
                redacted[name] = Schema(attr.attributes).redact(value)
            else:
                redacted[name] = value
        return redacted
