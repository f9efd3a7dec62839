"""stytch_email_template: a custom email template of a project."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, known
from ..core.stytch import EmailTemplateService
from ..core.validators import one_of, parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)

TEXT_ALIGNMENTS = ("LEFT", "CENTER")
CUSTOM_TEMPLATE_TYPES = ("LOGIN", "SIGNUP", "INVITE", "RESET_PASSWORD", "ONE_TIME_PASSCODE", "VERIFY_EMAIL", "ALL")

CUSTOMIZATION_BLOCKS = ("sender_information", "prebuilt_customization", "custom_html_customization")


class EmailTemplateResource(Resource):
    """Manages an email template.
    
    A template is either prebuilt (Stytch layout with colour and font
    overrides) or custom HTML, never both.
    """
    
    type_name = "stytch_email_template"
    schema = Schema(
        description="Manages an email template for a project.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("template_id", required=True, plan_modifiers=[requires_replace]),
            Attribute("name", optional=True),
            Attribute(
                "sender_information",
                kind="object",
                optional=True,
                attributes=[
                    Attribute("from_local_part", optional=True),
                    Attribute("from_domain", optional=True),
                    Attribute("from_name", optional=True),
                    Attribute("reply_to_local_part", optional=True),
                    Attribute("reply_to_name", optional=True),
                ],
            ),
            Attribute(
                "prebuilt_customization",
                kind="object",
                optional=True,
                attributes=[
                    Attribute("button_border_radius", kind="float", optional=True),
                    Attribute("button_color", optional=True),
                    Attribute("button_text_color", optional=True),
                    Attribute("font_family", optional=True),
                    Attribute("text_alignment", optional=True, validators=[one_of(*TEXT_ALIGNMENTS)]),
                ],
            ),
            Attribute(
                "custom_html_customization",
                kind="object",
                optional=True,
                attributes=[
                    Attribute("template_type", required=True, validators=[one_of(*CUSTOM_TEMPLATE_TYPES)]),
                    Attribute("html_content", optional=True),
                    Attribute("plaintext_content", optional=True),
                    Attribute("subject", optional=True),
                ],
            ),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def templates(self) -> EmailTemplateService:
        return EmailTemplateService(self.client)
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        if config.get("prebuilt_customization") is not None and config.get("custom_html_customization") is not None:
            diags.add_error(
                "Invalid Attribute Combination",
                "Only one of prebuilt_customization or custom_html_customization can be set.",
                "custom_html_customization",
            )
        return diags
    
    @staticmethod
    def _to_api(plan: Dict[str, Any]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"template_id": plan["template_id"]}
        name = known(plan.get("name"))
        if name:
            body["name"] = name
        for block in CUSTOMIZATION_BLOCKS:
            value = known(plan.get(block))
            if value:
                body[block] = {k: v for k, v in value.items() if known(v) is not None}
        return body
    
    @staticmethod
    def _from_api(project_slug: str, template: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        state = {
            "id": f"{project_slug}.{template['template_id']}",
            "project_slug": project_slug,
            "template_id": template["template_id"],
            "name": template.get("name") or None,
            "last_updated": last_updated,
        }
        for block in CUSTOMIZATION_BLOCKS:
            state[block] = template.get(block) or None
        return state
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        project_slug = plan["project_slug"]
        logger.info(f"[email_template] Creating template {plan['template_id']} in {project_slug}")
        with api_call("Failed to create email template"):
            template = self.templates.create(project_slug, self._to_api(plan))
        return self._from_api(project_slug, template, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        project_slug = state["project_slug"]
        template = fetch_or_none("Failed to get email template", self.templates.get, project_slug, state["template_id"])
        if template is None:
            return None
        return self._from_api(project_slug, template, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, template_id = state["project_slug"], state["template_id"]
        logger.info(f"[email_template] Updating template {template_id} in {project_slug}")
        with api_call("Failed to update email template"):
            template = self.templates.update(project_slug, template_id, self._to_api(plan))
        return self._from_api(project_slug, template, timestamp())
    
    def delete(self, state: Dict[str, Any]) -> None:
        logger.info(f"[email_template] Deleting template {state['template_id']} in {state['project_slug']}")
        with api_call("Failed to delete email template"):
            self.templates.delete(state["project_slug"], state["template_id"])
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "template_id"])
        return {"id": import_id, **parts}
