"""stytch_event_log_streaming: stream environment event logs to a destination."""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import preserve_sensitive_value, requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, is_known, known
from ..core.stytch import (
    DATADOG_SITES,
    DESTINATION_TYPES,
    STREAMING_STATUS_ACTIVE,
    EventLogStreamingService,
)
from ..core.validators import length_between, one_of, parse_import_id, regex_matches
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)

# destination_type -> (attribute holding its config, key in the API payload)
CONFIG_BLOCKS = {
    "DATADOG": ("datadog_config", "datadog"),
    "GRAFANA_LOKI": ("grafana_loki_config", "grafana_loki"),
}
SENSITIVE_FIELDS = {
    "datadog_config": ("api_key",),
    "grafana_loki_config": ("password",),
}


class EventLogStreamingResource(Resource):
    """Manages an event log streaming destination.
    
    The API masks API keys and passwords on read, so those fields are carried
    over from the prior state rather than refreshed. New destinations start
    disabled; ``enabled = true`` enables streaming right after creation.
    """
    
    type_name = "stytch_event_log_streaming"
    schema = Schema(
        version=1,
        description="Manages event log streaming for a project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute(
                "destination_type",
                required=True,
                validators=[one_of(*DESTINATION_TYPES)],
                plan_modifiers=[requires_replace],
            ),
            Attribute("enabled", kind="bool", optional=True, computed=True, default=False),
            Attribute(
                "datadog_config",
                kind="object",
                optional=True,
                attributes=[
                    Attribute("site", required=True, validators=[one_of(*DATADOG_SITES)]),
                    Attribute(
                        "api_key",
                        required=True,
                        sensitive=True,
                        validators=[
                            length_between(32, 32),
                            regex_matches(r"^[0-9a-fA-F]+$", "must be a hexadecimal string"),
                        ],
                        plan_modifiers=[preserve_sensitive_value],
                    ),
                ],
            ),
            Attribute(
                "grafana_loki_config",
                kind="object",
                optional=True,
                attributes=[
                    Attribute("hostname", required=True),
                    Attribute("username", required=True),
                    Attribute("password", required=True, sensitive=True, plan_modifiers=[preserve_sensitive_value]),
                ],
            ),
            Attribute("streaming_status", computed=True),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def streams(self) -> EventLogStreamingService:
        return EventLogStreamingService(self.client)
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        destination_type = config.get("destination_type")
        if not is_known(destination_type):
            return diags
        expected, _ = CONFIG_BLOCKS[destination_type]
        if config.get(expected) is None:
            diags.add_error(
                "Missing destination configuration",
                f"{expected} is required when destination_type is {destination_type}.",
                expected,
            )
        for other, _ in CONFIG_BLOCKS.values():
            if other != expected and config.get(other) is not None:
                diags.add_error(
                    "Conflicting destination configuration",
                    f"{other} cannot be set when destination_type is {destination_type}.",
                    other,
                )
        return diags
    
    @staticmethod
    def _destination_config(plan: Dict[str, Any]) -> Dict[str, Any]:
        attribute, key = CONFIG_BLOCKS[plan["destination_type"]]
        return {key: dict(plan[attribute])}
    
    @staticmethod
    def _from_api(
        p: str,
        e: str,
        stream: Dict[str, Any],
        prior: Dict[str, Any],
        last_updated: Optional[str],
    ) -> Dict[str, Any]:
        destination_type = stream["destination_type"]
        status = stream.get("streaming_status", "")
        state = {
            "id": f"{p}.{e}.{destination_type}",
            "project_slug": p,
            "environment_slug": e,
            "destination_type": destination_type,
            "enabled": status == STREAMING_STATUS_ACTIVE,
            "datadog_config": None,
            "grafana_loki_config": None,
            "streaming_status": status,
            "last_updated": last_updated,
        }
        attribute, key = CONFIG_BLOCKS[destination_type]
        api_block = (stream.get("destination_config") or {}).get(key) or {}
        prior_block = prior.get(attribute) or {}
        block = dict(api_block)
        for field in SENSITIVE_FIELDS[attribute]:
            if prior_block.get(field) is not None:
                block[field] = prior_block[field]
        state[attribute] = block
        return state
    
    def _fetch(self, plan: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        with api_call("Failed to get event log streaming config"):
            stream = self.streams.get(p, e, plan["destination_type"])
        return self._from_api(p, e, stream, plan, last_updated)
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e, destination_type = plan["project_slug"], plan["environment_slug"], plan["destination_type"]
        logger.info(f"[event_log_streaming] Creating {destination_type} destination for {p}/{e}")
        with api_call("Failed to create event log streaming"):
            self.streams.create(p, e, destination_type, self._destination_config(plan))
        
        if known(plan.get("enabled"), False):
            logger.info(f"[event_log_streaming] Enabling {destination_type} destination for {p}/{e}")
            with api_call("Failed to enable event log streaming"):
                self.streams.enable(p, e, destination_type)
        
        return self._fetch(plan, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        stream = fetch_or_none("Failed to get event log streaming config", self.streams.get, p, e, state["destination_type"])
        if stream is None:
            return None
        return self._from_api(p, e, stream, state, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        p, e, destination_type = plan["project_slug"], plan["environment_slug"], plan["destination_type"]
        logger.info(f"[event_log_streaming] Updating {destination_type} destination for {p}/{e}")
        with api_call("Failed to update event log streaming"):
            self.streams.update(p, e, destination_type, self._destination_config(plan))
        
        enabled = known(plan.get("enabled"), False)
        if enabled != bool(state.get("enabled")):
            if enabled:
                with api_call("Failed to enable event log streaming"):
                    self.streams.enable(p, e, destination_type)
            else:
                with api_call("Failed to disable event log streaming"):
                    self.streams.disable(p, e, destination_type)
        
        return self._fetch(plan, timestamp())
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e, destination_type = state["project_slug"], state["environment_slug"], state["destination_type"]
        logger.info(f"[event_log_streaming] Deleting {destination_type} destination for {p}/{e}")
        with api_call("Failed to delete event log streaming"):
            self.streams.delete(p, e, destination_type)
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "destination_type"])
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        destination_type = (prior.get("destination_type") or "").upper()
        with api_call("Failed to get event log streaming config"):
            stream = self.streams.get(project_slug, environment_slug, destination_type)
        # Secrets are masked by the API; only the prior state still holds them.
        return self._from_api(project_slug, environment_slug, stream, prior, timestamp())
