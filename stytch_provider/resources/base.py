"""Shared plumbing for resource translators.

A resource maps between a flat attribute dict (the declarative state) and
one Management API service. Subclasses declare ``type_name`` and ``schema``
and implement create/read/update/delete/import_state. Resources whose schema
version was bumped also return upgraders from ``state_upgraders``.
"""
from __future__ import annotations
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, Optional

from ..core.diagnostics import DiagnosticError, Diagnostics
from ..core.legacy_resolver import LegacyProjectResolver
from ..core.schema import Plan, Schema
from ..core.stytch import MigrationService, StytchClient, StytchError, StytchNotFoundError

logger = logging.getLogger(__name__)

StateUpgrader = Callable[[Dict[str, Any]], Dict[str, Any]]


def timestamp() -> str:
    """Current time in RFC 850 form, as stored in ``last_updated``."""
    return datetime.now().astimezone().strftime("%A, %d-%b-%y %H:%M:%S %Z")


@contextmanager
def api_call(summary: str) -> Iterator[None]:
    """Turn a StytchError raised in the block into a DiagnosticError."""
    try:
        yield
    except StytchError as exc:
        raise DiagnosticError(summary, str(exc)) from exc


def fetch_or_none(summary: str, fn: Callable[..., Any], *args: Any) -> Any:
    """Call an API read; None when the object no longer exists (404)."""
    try:
        return fn(*args)
    except StytchNotFoundError:
        return None
    except StytchError as exc:
        raise DiagnosticError(summary, str(exc)) from exc


class Resource:
    """Base class for all resource types."""
    
    type_name: str = ""
    schema: Schema = Schema(attributes=())
    
    def __init__(self, client: Optional[StytchClient]):
        """Initialize resource.
        
        Args:
            client: Configured Stytch client (None for offline validation)
        """
        self.client = client
    
    @property
    def label(self) -> str:
        return self.type_name.replace("stytch_", "").replace("_", " ")
    
    def resolver(self) -> LegacyProjectResolver:
        return LegacyProjectResolver(MigrationService(self.client))
    
    # ─────────────────────────────────────────────────────────────────────
    # Planning
    # ─────────────────────────────────────────────────────────────────────
    
    def validate_config(self, config: Dict[str, Any]) -> Diagnostics:
        """Schema validation plus any resource-specific cross-field checks."""
        diags = self.schema.validate(config)
        if not diags.has_error():
            diags.extend(self.validate_resource(config))
        return diags
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        return Diagnostics()
    
    def plan(self, config: Dict[str, Any], state: Optional[Dict[str, Any]] = None) -> Plan:
        return self.schema.plan(config, state)
    
    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError
    
    def delete(self, state: Dict[str, Any]) -> None:
        raise NotImplementedError
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        """Return the partial state an import ID identifies; a read completes it."""
        raise NotImplementedError
    
    # ─────────────────────────────────────────────────────────────────────
    # State upgrades
    # ─────────────────────────────────────────────────────────────────────
    
    def state_upgraders(self) -> Dict[int, StateUpgrader]:
        """Map of prior schema version -> function producing the next version."""
        return {}
    
    def upgrade_state(self, version: int, prior: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Upgrade state written at ``version`` to the next schema version.
        
        Raises:
            DiagnosticError: No upgrader for that version, no prior state, or the
                upgrader itself failed
        """
        upgrader = self.state_upgraders().get(version)
        if upgrader is None:
            raise DiagnosticError(
                "Unable to Upgrade Resource State",
                f"The {self.type_name} resource does not support upgrading state from version {version}.",
            )
        if not prior:
            raise DiagnosticError(
                "Missing prior state",
                f"Legacy {self.label} state upgrade requires existing state data, but none was provided.",
            )
        logger.info(f"[{self.type_name}] Upgrading state from version {version}")
        return upgrader(prior)
