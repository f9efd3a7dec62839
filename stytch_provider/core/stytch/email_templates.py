"""Stytch email template operations.

Email templates belong to a project, not to an environment.
"""
from __future__ import annotations

from .client import StytchClient
from ._paths import project_path


class EmailTemplateService:
    """Service for custom email templates."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def create(self, project_slug: str, template: dict) -> dict:
        body = self.client.post(f"{project_path(project_slug)}/email_templates", json=template)
        return body["email_template"]
    
    def get(self, project_slug: str, template_id: str) -> dict:
        body = self.client.get(f"{project_path(project_slug)}/email_templates/{template_id}")
        return body["email_template"]
    
    def update(self, project_slug: str, template_id: str, template: dict) -> dict:
        body = self.client.put(f"{project_path(project_slug)}/email_templates/{template_id}", json=template)
        return body["email_template"]
    
    def delete(self, project_slug: str, template_id: str) -> None:
        self.client.delete(f"{project_path(project_slug)}/email_templates/{template_id}")
    
    # Default templates per email type
    
    def get_default(self, project_slug: str, email_template_type: str) -> str:
        """Return the template_id used by default for ``email_template_type``."""
        body = self.client.get(f"{project_path(project_slug)}/email_templates/default/{email_template_type}")
        return body.get("template_id") or ""
    
    def set_default(self, project_slug: str, email_template_type: str, template_id: str) -> None:
        self.client.put(
            f"{project_path(project_slug)}/email_templates/default/{email_template_type}",
            json={"template_id": template_id},
        )
    
    def unset_default(self, project_slug: str, email_template_type: str) -> None:
        self.client.delete(f"{project_path(project_slug)}/email_templates/default/{email_template_type}")
