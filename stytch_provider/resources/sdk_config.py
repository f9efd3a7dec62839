"""stytch_consumer_sdk_config and stytch_b2b_sdk_config: frontend SDK configuration.

Both resources share one implementation; they differ only in the vertical
they address (``kind``) and their type name.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, known
from ..core.stytch import SDKConfigService
from ..core.validators import parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


def _sdk_schema(vertical: str) -> Schema:
    return Schema(
        description=f"Manages the configuration of your JavaScript, React Native, iOS, or Android SDKs for a {vertical} project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("config", kind="map", required=True),
            Attribute("last_updated", computed=True),
        ],
    )


class _SDKConfigResource(Resource):
    """SDK config of one vertical. The config mapping is sent as-is.

    The config always exists on the API side, so destroying the resource
    disables the SDK (``basic.enabled = false``) and leaves the other
    fields untouched.
    """

    kind = ""

    @property
    def sdk(self) -> SDKConfigService:
        return SDKConfigService(self.client)

    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        sdk_config = known(config.get("config"))
        if sdk_config is None:
            return diags
        basic = sdk_config.get("basic")
        if not isinstance(basic, dict) or "enabled" not in basic:
            diags.add_error(
                "Missing basic configuration",
                "config.basic.enabled is required to turn the SDK on or off.",
                "config.basic",
            )
        return diags

    def _from_api(self, p: str, e: str, config: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}",
            "project_slug": p,
            "environment_slug": e,
            "config": config,
            "last_updated": last_updated,
        }

    def _set(self, plan: Dict[str, Any], summary: str) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        with api_call(summary):
            config = self.sdk.set(p, e, self.kind, plan["config"])
        return self._from_api(p, e, config, timestamp())

    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[{self.type_name}] Setting SDK config for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, f"Failed to set {self.label}")

    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        config = fetch_or_none(f"Failed to get {self.label}", self.sdk.get, p, e, self.kind)
        if config is None:
            return None
        return self._from_api(p, e, config, state.get("last_updated"))

    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[{self.type_name}] Updating SDK config for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, f"Failed to set {self.label}")

    def delete(self, state: Dict[str, Any]) -> None:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[{self.type_name}] Disabling SDK for {p}/{e}")
        with api_call(f"Failed to reset {self.label}"):
            self.sdk.set(p, e, self.kind, {"basic": {"enabled": False}})

    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug"])
        return {"id": import_id, **parts}


class ConsumerSDKConfigResource(_SDKConfigResource):
    type_name = "stytch_consumer_sdk_config"
    kind = "consumer"
    schema = _sdk_schema("Consumer")


class B2BSDKConfigResource(_SDKConfigResource):
    type_name = "stytch_b2b_sdk_config"
    kind = "b2b"
    schema = _sdk_schema("B2B")
