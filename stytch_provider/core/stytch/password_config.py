"""Stytch password strength configuration operations."""
from __future__ import annotations
from typing import Optional

from .client import StytchClient
from ._paths import environment_path

VALIDATION_POLICIES = ("LUDS", "ZXCVBN")


class PasswordConfigService:
    """Service for the password strength config of an environment."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/password_strength_config"
    
    def get(self, project_slug: str, environment_slug: str) -> dict:
        body = self.client.get(self._path(project_slug, environment_slug))
        return body["password_strength_config"]
    
    def set(
        self,
        project_slug: str,
        environment_slug: str,
        validation_policy: str,
        check_breach_on_creation: bool = False,
        check_breach_on_authentication: bool = False,
        validate_on_authentication: bool = False,
        luds_min_password_length: Optional[int] = None,
        luds_min_password_complexity: Optional[int] = None,
    ) -> dict:
        """Overwrite the password strength config.
        
        LUDS fields are only sent when given; the platform applies its own
        defaults otherwise.
        """
        payload = {
            "check_breach_on_creation": check_breach_on_creation,
            "check_breach_on_authentication": check_breach_on_authentication,
            "validate_on_authentication": validate_on_authentication,
            "validation_policy": validation_policy,
        }
        if luds_min_password_length is not None:
            payload["luds_min_password_length"] = luds_min_password_length
        if luds_min_password_complexity is not None:
            payload["luds_min_password_complexity"] = luds_min_password_complexity
        body = self.client.put(self._path(project_slug, environment_slug), json=payload)
        return body["password_strength_config"]
