"""stytch_jwt_template: the session or M2M JWT template of an environment."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, known
from ..core.stytch import JWT_TEMPLATE_TYPES, JWTTemplateService
from ..core.validators import one_of, parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


class JWTTemplateResource(Resource):
    """Manages a JWT template. Destroying it resets the template to empty."""
    
    type_name = "stytch_jwt_template"
    schema = Schema(
        version=1,
        description="Manages a JWT template for a project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute(
                "template_type",
                required=True,
                validators=[one_of(*JWT_TEMPLATE_TYPES)],
                plan_modifiers=[requires_replace],
            ),
            Attribute("template_content", required=True, description="The JWT template body."),
            Attribute("custom_audience", optional=True, computed=True, default=""),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def templates(self) -> JWTTemplateService:
        return JWTTemplateService(self.client)
    
    @staticmethod
    def _from_api(p: str, e: str, template_type: str, template: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}.{template_type}",
            "project_slug": p,
            "environment_slug": e,
            "template_type": template_type,
            "template_content": template.get("template_content", ""),
            "custom_audience": template.get("custom_audience", ""),
            "last_updated": last_updated,
        }
    
    def _set(self, plan: Dict[str, Any], summary: str) -> Dict[str, Any]:
        p, e, template_type = plan["project_slug"], plan["environment_slug"], plan["template_type"]
        with api_call(summary):
            template = self.templates.set(
                p, e, template_type, plan["template_content"], known(plan.get("custom_audience"), "")
            )
        return self._from_api(p, e, template_type, template, timestamp())
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[jwt_template] Setting {plan['template_type']} template for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, "Failed to set JWT template")
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e, template_type = state["project_slug"], state["environment_slug"], state["template_type"]
        template = fetch_or_none("Failed to get JWT template", self.templates.get, p, e, template_type)
        if template is None:
            return None
        return self._from_api(p, e, template_type, template, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[jwt_template] Updating {plan['template_type']} template for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, "Failed to update JWT template")
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e, template_type = state["project_slug"], state["environment_slug"], state["template_type"]
        logger.info(f"[jwt_template] Resetting {template_type} template for {p}/{e}")
        with api_call("Failed to delete JWT template"):
            self.templates.set(p, e, template_type, "", "")
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "template_type"])
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        # v0 accepted lower-case template types
        template_type = (prior.get("template_type") or "").upper()
        with api_call("Failed to get JWT template"):
            template = self.templates.get(project_slug, environment_slug, template_type)
        return self._from_api(project_slug, environment_slug, template_type, template, timestamp())
