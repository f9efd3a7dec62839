"""Stytch country code allowlist operations."""
from __future__ import annotations
from typing import List

from .client import StytchClient
from ._paths import environment_path

DELIVERY_METHODS = ("sms", "whatsapp")
DEFAULT_COUNTRY_CODES = ["CA", "US"]


class CountryCodeAllowlistService:
    """Service for SMS and WhatsApp country code allowlists."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str, delivery_method: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/country_code_allowlists/{delivery_method}"
    
    def get(self, project_slug: str, environment_slug: str, delivery_method: str) -> List[str]:
        body = self.client.get(self._path(project_slug, environment_slug, delivery_method))
        return body.get("country_codes") or []
    
    def set(self, project_slug: str, environment_slug: str, delivery_method: str, country_codes: List[str]) -> List[str]:
        body = self.client.put(
            self._path(project_slug, environment_slug, delivery_method),
            json={"country_codes": country_codes},
        )
        return body.get("country_codes") or []
