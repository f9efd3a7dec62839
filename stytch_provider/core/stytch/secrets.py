"""Stytch API secret operations."""
from __future__ import annotations

from .client import StytchClient
from ._paths import environment_path


class SecretService:
    """Service for the API secrets of an environment.
    
    The secret value is returned by ``create`` only; ``get`` returns the
    masked record.
    """
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/secrets"
    
    def create(self, project_slug: str, environment_slug: str) -> dict:
        body = self.client.post(self._path(project_slug, environment_slug))
        return body["secret"]
    
    def get(self, project_slug: str, environment_slug: str, secret_id: str) -> dict:
        body = self.client.get(f"{self._path(project_slug, environment_slug)}/{secret_id}")
        return body["secret"]
    
    def delete(self, project_slug: str, environment_slug: str, secret_id: str) -> None:
        self.client.delete(f"{self._path(project_slug, environment_slug)}/{secret_id}")
