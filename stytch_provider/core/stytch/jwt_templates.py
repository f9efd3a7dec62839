"""Stytch JWT template operations."""
from __future__ import annotations

from .client import StytchClient
from ._paths import environment_path

JWT_TEMPLATE_TYPES = ("SESSION", "M2M")


class JWTTemplateService:
    """Service for the session and M2M JWT templates of an environment."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str, template_type: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/jwt_templates/{template_type}"
    
    def get(self, project_slug: str, environment_slug: str, template_type: str) -> dict:
        body = self.client.get(self._path(project_slug, environment_slug, template_type))
        return body["jwt_template"]
    
    def set(
        self,
        project_slug: str,
        environment_slug: str,
        template_type: str,
        template_content: str,
        custom_audience: str = "",
    ) -> dict:
        payload = {
            "template_content": template_content,
            "custom_audience": custom_audience,
        }
        body = self.client.put(self._path(project_slug, environment_slug, template_type), json=payload)
        return body["jwt_template"]
