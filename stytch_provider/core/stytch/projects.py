"""Stytch project management operations."""
from __future__ import annotations
from typing import Optional

from .client import StytchClient

VERTICALS = ("CONSUMER", "B2B")


class ProjectService:
    """Service for managing Stytch projects."""
    
    def __init__(self, client: StytchClient):
        """Initialize project service.
        
        Args:
            client: Configured Stytch client
        """
        self.client = client
    
    def create(self, name: str, vertical: str, project_slug: Optional[str] = None) -> dict:
        """Create a project.
        
        Args:
            name: Display name
            vertical: CONSUMER or B2B
            project_slug: Desired slug; the platform generates one when omitted
            
        Returns:
            Project representation
        """
        payload = {"name": name, "vertical": vertical}
        if project_slug:
            payload["project_slug"] = project_slug
        body = self.client.post("/pwa/v3/projects", json=payload)
        return body["project"]
    
    def get(self, project_slug: str) -> dict:
        """Return the project representation for a slug."""
        body = self.client.get(f"/pwa/v3/projects/{project_slug}")
        return body["project"]
    
    def update(self, project_slug: str, name: str) -> dict:
        """Rename a project. The vertical cannot change after creation."""
        body = self.client.patch(f"/pwa/v3/projects/{project_slug}", json={"name": name})
        return body["project"]
    
    def delete(self, project_slug: str) -> None:
        self.client.delete(f"/pwa/v3/projects/{project_slug}")
