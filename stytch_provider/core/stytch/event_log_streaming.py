"""Stytch event log streaming operations."""
from __future__ import annotations

from .client import StytchClient
from ._paths import environment_path

DESTINATION_TYPES = ("DATADOG", "GRAFANA_LOKI")
DATADOG_SITES = ("US", "US3", "US5", "EU", "AP1")
STREAMING_STATUS_ACTIVE = "ACTIVE"


class EventLogStreamingService:
    """Service for event log streaming destinations of an environment.
    
    ``create`` and ``update`` echo the full destination config. ``get`` returns
    a masked config (API keys and passwords are not readable back), plus the
    ``streaming_status``. New destinations start disabled.
    """
    
    def __init__(self, client: StytchClient):
        self.client = client
    
    def _path(self, project_slug: str, environment_slug: str) -> str:
        return f"{environment_path(project_slug, environment_slug)}/event_log_streaming"
    
    def create(self, project_slug: str, environment_slug: str, destination_type: str, destination_config: dict) -> dict:
        payload = {
            "destination_type": destination_type,
            "destination_config": destination_config,
        }
        body = self.client.post(self._path(project_slug, environment_slug), json=payload)
        return body["event_log_streaming_config"]
    
    def get(self, project_slug: str, environment_slug: str, destination_type: str) -> dict:
        body = self.client.get(f"{self._path(project_slug, environment_slug)}/{destination_type}")
        return body["event_log_streaming_config"]
    
    def update(self, project_slug: str, environment_slug: str, destination_type: str, destination_config: dict) -> dict:
        body = self.client.put(
            f"{self._path(project_slug, environment_slug)}/{destination_type}",
            json={"destination_config": destination_config},
        )
        return body["event_log_streaming_config"]
    
    def delete(self, project_slug: str, environment_slug: str, destination_type: str) -> None:
        self.client.delete(f"{self._path(project_slug, environment_slug)}/{destination_type}")
    
    def enable(self, project_slug: str, environment_slug: str, destination_type: str) -> None:
        self.client.post(f"{self._path(project_slug, environment_slug)}/{destination_type}/enable")
    
    def disable(self, project_slug: str, environment_slug: str, destination_type: str) -> None:
        self.client.post(f"{self._path(project_slug, environment_slug)}/{destination_type}/disable")
