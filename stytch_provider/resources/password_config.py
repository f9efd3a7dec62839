"""stytch_password_config: password strength settings of an environment."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, known
from ..core.stytch import PasswordConfigService, VALIDATION_POLICIES
from ..core.validators import int_between, one_of, parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)

LUDS_FIELDS = ("luds_min_password_length", "luds_min_password_complexity")


class PasswordConfigResource(Resource):
    """Manages password strength configuration for an environment.
    
    There is nothing to delete on the platform; destroying the resource
    resets the environment to the platform defaults.
    """
    
    type_name = "stytch_password_config"
    schema = Schema(
        description="Manages password strength configuration for an environment within a Stytch project.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("check_breach_on_creation", kind="bool", optional=True, computed=True, default=False),
            Attribute("check_breach_on_authentication", kind="bool", optional=True, computed=True, default=False),
            Attribute("validate_on_authentication", kind="bool", optional=True, computed=True, default=False),
            Attribute("validation_policy", required=True, validators=[one_of(*VALIDATION_POLICIES)]),
            Attribute(
                "luds_min_password_length",
                kind="int",
                optional=True,
                validators=[int_between(8, 32)],
                plan_modifiers=[use_state_for_unknown],
            ),
            Attribute(
                "luds_min_password_complexity",
                kind="int",
                optional=True,
                validators=[int_between(1, 4)],
                plan_modifiers=[use_state_for_unknown],
            ),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def password_config(self) -> PasswordConfigService:
        return PasswordConfigService(self.client)
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        if config.get("validation_policy") == "ZXCVBN":
            for name in LUDS_FIELDS:
                if config.get(name) is not None:
                    diags.add_error(
                        "Invalid Attribute Configuration",
                        f"{name} cannot be set when validation_policy is ZXCVBN",
                        name,
                    )
        return diags
    
    @staticmethod
    def _from_api(p: str, e: str, config: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}",
            "project_slug": p,
            "environment_slug": e,
            "check_breach_on_creation": bool(config.get("check_breach_on_creation")),
            "check_breach_on_authentication": bool(config.get("check_breach_on_authentication")),
            "validate_on_authentication": bool(config.get("validate_on_authentication")),
            "validation_policy": config.get("validation_policy"),
            "luds_min_password_length": config.get("luds_min_password_length"),
            "luds_min_password_complexity": config.get("luds_min_password_complexity"),
            "last_updated": last_updated,
        }
    
    def _set(self, plan: Dict[str, Any], summary: str) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        with api_call(summary):
            config = self.password_config.set(
                p,
                e,
                validation_policy=plan["validation_policy"],
                check_breach_on_creation=bool(known(plan.get("check_breach_on_creation"), False)),
                check_breach_on_authentication=bool(known(plan.get("check_breach_on_authentication"), False)),
                validate_on_authentication=bool(known(plan.get("validate_on_authentication"), False)),
                luds_min_password_length=known(plan.get("luds_min_password_length")),
                luds_min_password_complexity=known(plan.get("luds_min_password_complexity")),
            )
        return self._from_api(p, e, config, timestamp())
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[password_config] Creating password config for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, "Failed to create password config")
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[password_config] Reading password config for {p}/{e}")
        config = fetch_or_none("Failed to get password config", self.password_config.get, p, e)
        if config is None:
            return None
        return self._from_api(p, e, config, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[password_config] Updating password config for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, "Failed to update password config")
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[password_config] Resetting password config for {p}/{e} to defaults")
        with api_call("Failed to reset password config"):
            self.password_config.set(
                p,
                e,
                validation_policy="ZXCVBN",
                check_breach_on_creation=True,
                check_breach_on_authentication=True,
                validate_on_authentication=True,
            )
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug"])
        return {"id": import_id, **parts}
