"""stytch_default_email_template: which template a project uses for one email type."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import DiagnosticError
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema
from ..core.stytch import EmailTemplateService
from ..core.validators import one_of
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_TYPES = (
    "LOGIN",
    "SIGNUP",
    "INVITE",
    "RESET_PASSWORD",
    "ONE_TIME_PASSCODE",
    "ONE_TIME_PASSCODE_SIGNUP",
    "VERIFY_EMAIL_PASSWORD_RESET",
    "UNLOCK",
    "PREBUILT",
)


class DefaultEmailTemplateResource(Resource):
    """Points an email type of a project at an existing email template.

    Destroying the resource unsets the default; the template itself is
    left alone.
    """

    type_name = "stytch_default_email_template"
    schema = Schema(
        description="Manages the default email template for an email template type in a project.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute(
                "email_template_type",
                required=True,
                validators=[one_of(*DEFAULT_TEMPLATE_TYPES)],
                plan_modifiers=[requires_replace],
            ),
            Attribute("template_id", required=True),
            Attribute("last_updated", computed=True),
        ],
    )

    @property
    def templates(self) -> EmailTemplateService:
        return EmailTemplateService(self.client)

    @staticmethod
    def _state(project_slug: str, email_template_type: str, template_id: str, last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{project_slug}.{email_template_type}",
            "project_slug": project_slug,
            "email_template_type": email_template_type,
            "template_id": template_id,
            "last_updated": last_updated,
        }

    def _set_default(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, email_template_type = plan["project_slug"], plan["email_template_type"]
        with api_call("Failed to set default email template"):
            self.templates.set_default(project_slug, email_template_type, plan["template_id"])
        return self._state(project_slug, email_template_type, plan["template_id"], timestamp())

    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[default_email_template] Setting {plan['email_template_type']} default to {plan['template_id']} in {plan['project_slug']}")
        return self._set_default(plan)

    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        project_slug, email_template_type = state["project_slug"], state["email_template_type"]
        template_id = fetch_or_none(
            "Failed to get default email template",
            self.templates.get_default,
            project_slug,
            email_template_type,
        )
        if not template_id:
            return None
        return self._state(project_slug, email_template_type, template_id, state.get("last_updated"))

    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[default_email_template] Updating {plan['email_template_type']} default to {plan['template_id']} in {plan['project_slug']}")
        return self._set_default(plan)

    def delete(self, state: Dict[str, Any]) -> None:
        logger.info(f"[default_email_template] Unsetting {state['email_template_type']} default in {state['project_slug']}")
        with api_call("Failed to unset default email template"):
            self.templates.unset_default(state["project_slug"], state["email_template_type"])

    def import_state(self, import_id: str) -> Dict[str, Any]:
        # The project slug may itself contain dots; the type never does.
        project_slug, _, email_template_type = import_id.rpartition(".")
        if not project_slug or not email_template_type:
            raise DiagnosticError(
                "Invalid Import ID",
                f"Import ID must be in format 'project_slug.email_template_type', got: {import_id}",
            )
        return {"id": import_id, "project_slug": project_slug, "email_template_type": email_template_type}
