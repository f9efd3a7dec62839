"""stytch_secret: an API secret of an environment."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import DiagnosticError
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema
from ..core.stytch import SecretService
from ..core.validators import parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


class SecretResource(Resource):
    """Manages an API secret.
    
    The secret value is only returned when the secret is created; reads and
    state upgrades keep the value already in state.
    """
    
    type_name = "stytch_secret"
    schema = Schema(
        version=1,
        description="Manages a secret for a project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("secret_id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("secret", computed=True, sensitive=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("created_at", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def secrets(self) -> SecretService:
        return SecretService(self.client)
    
    @staticmethod
    def _from_api(
        p: str,
        e: str,
        record: Dict[str, Any],
        secret_value: Optional[str],
        last_updated: Optional[str],
    ) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}.{record['secret_id']}",
            "project_slug": p,
            "environment_slug": e,
            "secret_id": record["secret_id"],
            "secret": secret_value,
            "created_at": record.get("created_at", ""),
            "last_updated": last_updated,
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        logger.info(f"[secret] Creating secret for {p}/{e}")
        with api_call("Failed to create secret"):
            record = self.secrets.create(p, e)
        logger.info(f"[secret] Created secret {record['secret_id']}")
        return self._from_api(p, e, record, record.get("secret"), timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        record = fetch_or_none("Failed to get secret", self.secrets.get, p, e, state["secret_id"])
        if record is None:
            return None
        return self._from_api(p, e, record, state.get("secret"), state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        raise DiagnosticError("Update not allowed", "Secrets cannot be updated.")
    
    def delete(self, state: Dict[str, Any]) -> None:
        logger.info(f"[secret] Deleting secret {state['secret_id']}")
        with api_call("Failed to delete secret"):
            self.secrets.delete(state["project_slug"], state["environment_slug"], state["secret_id"])
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "secret_id"])
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        record = {"secret_id": prior["secret_id"], "created_at": prior.get("created_at") or ""}
        return self._from_api(project_slug, environment_slug, record, prior.get("secret"), timestamp())
