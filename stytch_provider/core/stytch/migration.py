"""Lookup of legacy (v1) projects through the v1-to-v3 migration endpoint."""
from __future__ import annotations
from dataclasses import dataclass
from urllib.parse import quote

from .client import StytchClient


@dataclass(frozen=True)
class LegacyProject:
    """Project record as returned by the migration endpoint.
    
    Any of the fields may come back empty; callers decide what is fatal.
    """
    project_slug: str = ""
    live_project_id: str = ""
    test_project_id: str = ""
    live_environment_slug: str = ""
    test_environment_slug: str = ""
    
    @classmethod
    def from_api(cls, data: dict) -> "LegacyProject":
        return cls(
            project_slug=data.get("project_slug") or "",
            live_project_id=data.get("live_project_id") or "",
            test_project_id=data.get("test_project_id") or "",
            live_environment_slug=data.get("live_environment_slug") or "",
            test_environment_slug=data.get("test_environment_slug") or "",
        )


class MigrationService:
    """Service for the v1-to-v3 migration endpoints."""
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def get_legacy_project(self, project_id: str) -> LegacyProject:
        """Fetch the v3 addressing information for a legacy project ID.
        
        Args:
            project_id: Legacy live or test project ID (e.g. ``project-live-...``)
            
        Returns:
            LegacyProject record
            
        Raises:
            StytchAPIError: On HTTP error
        """
        body = self.client.get(f"/pwa/v3/migration/projects/{quote(project_id, safe='')}")
        return LegacyProject.from_api(body.get("project") or {})
