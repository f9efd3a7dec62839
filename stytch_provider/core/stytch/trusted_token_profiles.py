"""Stytch trusted token profile operations."""
from __future__ import annotations
from typing import Optional

from .client import StytchClient
from ._paths import environment_path

PUBLIC_KEY_TYPES = ("JWK", "PEM")


class TrustedTokenProfileService:
    """Service for trusted token profiles and their PEM files."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/trusted_token_profiles"
    
    def create(self, project_slug: str, environment_slug: str, profile: dict) -> dict:
        """Create a profile.
        
        Args:
            profile: Profile body (name, audience, issuer, jwks_url,
                attribute_mapping, public_key_type, pem_files, can_jit_provision)
        """
        body = self.client.post(self._path(project_slug, environment_slug), json=profile)
        return body["trusted_token_profile"]
    
    def get(self, project_slug: str, environment_slug: str, profile_id: str) -> dict:
        body = self.client.get(f"{self._path(project_slug, environment_slug)}/{profile_id}")
        return body["trusted_token_profile"]
    
    def update(self, project_slug: str, environment_slug: str, profile_id: str, changes: dict) -> dict:
        """Patch mutable profile fields. PEM files are managed separately."""
        body = self.client.patch(f"{self._path(project_slug, environment_slug)}/{profile_id}", json=changes)
        return body["trusted_token_profile"]
    
    def delete(self, project_slug: str, environment_slug: str, profile_id: str) -> None:
        self.client.delete(f"{self._path(project_slug, environment_slug)}/{profile_id}")
    
    def create_pem(self, project_slug: str, environment_slug: str, profile_id: str, public_key: str) -> dict:
        body = self.client.post(
            f"{self._path(project_slug, environment_slug)}/{profile_id}/pem_files",
            json={"public_key": public_key},
        )
        return body["pem_file"]
    
    def delete_pem(
        self,
        project_slug: str,
        environment_slug: str,
        profile_id: str,
        pem_file_id: Optional[str],
    ) -> None:
        self.client.delete(f"{self._path(project_slug, environment_slug)}/{profile_id}/pem_files/{pem_file_id}")
