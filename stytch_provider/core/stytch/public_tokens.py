"""Stytch public token operations."""
from __future__ import annotations
from typing import List, Optional

from .client import StytchClient
from ._paths import environment_path


class PublicTokenService:
    """Service for the public tokens of an environment."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/public_tokens"
    
    def create(self, project_slug: str, environment_slug: str) -> dict:
        body = self.client.post(self._path(project_slug, environment_slug))
        return body["public_token"]
    
    def list(self, project_slug: str, environment_slug: str) -> List[dict]:
        body = self.client.get(self._path(project_slug, environment_slug))
        return body.get("public_tokens") or []
    
    def get(self, project_slug: str, environment_slug: str, public_token: str) -> Optional[dict]:
        """Return the token record, or None if the environment no longer has it.
        
        There is no single-token endpoint; this scans the list.
        """
        for token in self.list(project_slug, environment_slug):
            if token.get("public_token") == public_token:
                return token
        return None
    
    def delete(self, project_slug: str, environment_slug: str, public_token: str) -> None:
        self.client.delete(f"{self._path(project_slug, environment_slug)}/{public_token}")
