"""Stytch frontend SDK configuration operations."""
from __future__ import annotations

from .client import StytchClient
from ._paths import environment_path


class SDKConfigService:
    """Service for the consumer and B2B SDK configs of an environment."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def get(self, project_slug: str, environment_slug: str, kind: str) -> dict:
        body = self.client.get(f"{environment_path(project_slug, environment_slug)}/sdk/{kind}")
        return body["config"]
    
    def set(self, project_slug: str, environment_slug: str, kind: str, config: dict) -> dict:
        body = self.client.put(
            f"{environment_path(project_slug, environment_slug)}/sdk/{kind}",
            json={"config": config},
        )
        return body["config"]
