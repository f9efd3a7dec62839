"""stytch_public_token: a public token for the frontend SDKs."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import DiagnosticError
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema
from ..core.stytch import PublicTokenService
from ..core.validators import parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


class PublicTokenResource(Resource):
    """Manages a public token. Tokens are immutable; changes force replacement."""
    
    type_name = "stytch_public_token"
    schema = Schema(
        version=1,
        description="Manages a public token for a project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("public_token", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("created_at", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def tokens(self) -> PublicTokenService:
        return PublicTokenService(self.client)
    
    @staticmethod
    def _from_api(p: str, e: str, token: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}.{token['public_token']}",
            "project_slug": p,
            "environment_slug": e,
            "public_token": token["public_token"],
            "created_at": token.get("created_at", ""),
            "last_updated": last_updated,
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        logger.info(f"[public_token] Creating public token for {p}/{e}")
        with api_call("Failed to create public token"):
            token = self.tokens.create(p, e)
        return self._from_api(p, e, token, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        token = fetch_or_none("Failed to list public tokens", self.tokens.get, p, e, state["public_token"])
        if token is None:
            logger.warning(f"[public_token] Public token for {p}/{e} no longer exists")
            return None
        return self._from_api(p, e, token, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        raise DiagnosticError("Update not allowed", "Public tokens cannot be updated.")
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[public_token] Deleting public token for {p}/{e}")
        with api_call("Failed to delete public token"):
            self.tokens.delete(p, e, state["public_token"])
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "public_token"])
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        with api_call("Failed to list public tokens"):
            token = self.tokens.get(project_slug, environment_slug, prior["public_token"])
        if token is None:
            raise DiagnosticError(
                "Public token not found",
                f"Public token {prior['public_token']} does not exist in {project_slug}/{environment_slug}.",
            )
        return self._from_api(project_slug, environment_slug, token, timestamp())
