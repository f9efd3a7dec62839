"""Stytch redirect URL operations."""
from __future__ import annotations
from typing import List

from .client import StytchClient
from ._paths import environment_path

REDIRECT_URL_TYPES = ("LOGIN", "SIGNUP", "INVITE", "RESET_PASSWORD", "DISCOVERY")


class RedirectURLService:
    """Service for managing redirect URLs of an environment.
    
    Default promotion is always disabled: when a URL is declared as not the
    default for a type, the platform must not flip it to default on its own.
    """
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/redirect_urls"
    
    def create(self, project_slug: str, environment_slug: str, url: str, valid_types: List[dict]) -> dict:
        """Register a redirect URL.
        
        Args:
            project_slug: Project slug
            environment_slug: Environment slug
            url: Redirect URL
            valid_types: List of ``{"type": ..., "is_default": ...}``
            
        Returns:
            Redirect URL representation
        """
        payload = {
            "url": url,
            "valid_types": valid_types,
            "do_not_promote_defaults": True,
        }
        body = self.client.post(self._path(project_slug, environment_slug), json=payload)
        return body["redirect_url"]
    
    def get(self, project_slug: str, environment_slug: str, url: str) -> dict:
        body = self.client.get(self._path(project_slug, environment_slug), params={"url": url})
        return body["redirect_url"]
    
    def update(self, project_slug: str, environment_slug: str, url: str, valid_types: List[dict]) -> dict:
        payload = {
            "url": url,
            "valid_types": valid_types,
            "do_not_promote_defaults": True,
        }
        body = self.client.put(self._path(project_slug, environment_slug), json=payload)
        return body["redirect_url"]
    
    def delete(self, project_slug: str, environment_slug: str, url: str) -> None:
        self.client.delete(
            self._path(project_slug, environment_slug),
            params={"url": url, "do_not_promote_defaults": "true"},
        )
