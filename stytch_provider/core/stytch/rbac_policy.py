"""Stytch RBAC policy operations."""
from __future__ import annotations

from .client import StytchClient
from ._paths import environment_path


class RBACPolicyService:
    """Service for the RBAC policy of an environment.
    
    The policy is a single document; ``set`` replaces it wholesale.
    """
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/rbac_policy"
    
    def get(self, project_slug: str, environment_slug: str) -> dict:
        body = self.client.get(self._path(project_slug, environment_slug))
        return body["policy"]
    
    def set(self, project_slug: str, environment_slug: str, policy: dict) -> dict:
        body = self.client.put(self._path(project_slug, environment_slug), json={"policy": policy})
        return body["policy"]
