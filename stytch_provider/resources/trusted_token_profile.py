"""stytch_trusted_token_profile: trust tokens minted by an external issuer."""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, List, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, is_known, known
from ..core.stytch import PUBLIC_KEY_TYPES, TrustedTokenProfileService
from ..core.validators import each, json_object_of_strings, one_of, parse_import_id, pem_public_key
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


def _pem_file(value: Any) -> None:
    if not isinstance(value, dict):
        raise ValueError("each PEM file must be an object with a public_key")
    pem_public_key(value.get("public_key"))


class TrustedTokenProfileResource(Resource):
    """Manages a trusted token profile and its PEM files."""
    
    type_name = "stytch_trusted_token_profile"
    schema = Schema(
        description="Manages a trusted token profile for a project environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("profile_id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("name", required=True),
            Attribute("audience", required=True),
            Attribute("issuer", required=True),
            Attribute("jwks_url", optional=True),
            Attribute(
                "attribute_mapping_json",
                optional=True,
                validators=[json_object_of_strings],
                description="JSON object mapping token claims to member attributes.",
            ),
            Attribute(
                "public_key_type",
                required=True,
                validators=[one_of(*PUBLIC_KEY_TYPES)],
                plan_modifiers=[requires_replace],
            ),
            Attribute("pem_files", kind="set", optional=True, validators=[each(_pem_file)]),
            Attribute("can_jit_provision", kind="bool", optional=True, computed=True, default=False),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def profiles(self) -> TrustedTokenProfileService:
        return TrustedTokenProfileService(self.client)
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        public_key_type = config.get("public_key_type")
        if is_known(public_key_type) and public_key_type != "PEM" and config.get("pem_files"):
            diags.add_error(
                "Invalid Attribute Configuration",
                "pem_files can only be set when public_key_type is PEM.",
                "pem_files",
            )
        return diags
    
    @staticmethod
    def _attribute_mapping(plan: Dict[str, Any]) -> Dict[str, str]:
        raw = known(plan.get("attribute_mapping_json"))
        return json.loads(raw) if raw else {}
    
    @staticmethod
    def _from_api(p: str, e: str, profile: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        mapping = profile.get("attribute_mapping")
        return {
            "id": f"{p}.{e}.{profile['profile_id']}",
            "project_slug": p,
            "environment_slug": e,
            "profile_id": profile["profile_id"],
            "name": profile.get("name", ""),
            "audience": profile.get("audience", ""),
            "issuer": profile.get("issuer", ""),
            "jwks_url": profile.get("jwks_url") or None,
            "attribute_mapping_json": json.dumps(mapping, sort_keys=True) if mapping else None,
            "public_key_type": profile.get("public_key_type", ""),
            "pem_files": [
                {"pem_file_id": pem["pem_file_id"], "public_key": pem["public_key"]}
                for pem in profile.get("pem_files") or []
            ],
            "can_jit_provision": bool(profile.get("can_jit_provision")),
            "last_updated": last_updated,
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        logger.info(f"[trusted_token_profile] Creating profile {plan['name']} for {p}/{e}")
        body = {
            "name": plan["name"],
            "audience": plan["audience"],
            "issuer": plan["issuer"],
            "jwks_url": known(plan.get("jwks_url"), ""),
            "attribute_mapping": self._attribute_mapping(plan),
            "public_key_type": plan["public_key_type"],
            "pem_files": [pem["public_key"] for pem in known(plan.get("pem_files"), None) or []],
            "can_jit_provision": known(plan.get("can_jit_provision"), False),
        }
        with api_call("Failed to create trusted token profile"):
            profile = self.profiles.create(p, e, body)
        return self._from_api(p, e, profile, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        profile = fetch_or_none("Failed to get trusted token profile", self.profiles.get, p, e, state["profile_id"])
        if profile is None:
            return None
        return self._from_api(p, e, profile, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        p, e, profile_id = state["project_slug"], state["environment_slug"], state["profile_id"]
        logger.info(f"[trusted_token_profile] Updating profile {profile_id} for {p}/{e}")
        changes = {
            "name": plan["name"],
            "audience": plan["audience"],
            "issuer": plan["issuer"],
            "jwks_url": known(plan.get("jwks_url"), ""),
            "attribute_mapping": self._attribute_mapping(plan),
            "can_jit_provision": known(plan.get("can_jit_provision"), False),
        }
        with api_call("Failed to update trusted token profile"):
            self.profiles.update(p, e, profile_id, changes)
        
        self._sync_pem_files(p, e, profile_id, known(plan.get("pem_files"), None) or [], state.get("pem_files") or [])
        
        with api_call("Failed to get trusted token profile"):
            profile = self.profiles.get(p, e, profile_id)
        return self._from_api(p, e, profile, timestamp())
    
    def _sync_pem_files(
        self,
        p: str,
        e: str,
        profile_id: str,
        planned: List[Dict[str, Any]],
        existing: List[Dict[str, Any]],
    ) -> None:
        """Create PEM files new to the plan and delete those no longer planned."""
        planned_keys = {pem["public_key"] for pem in planned}
        existing_keys = {pem["public_key"] for pem in existing}
        
        for pem in existing:
            if pem["public_key"] not in planned_keys:
                logger.info(f"[trusted_token_profile] Deleting PEM file {pem.get('pem_file_id')} from {profile_id}")
                with api_call("Failed to delete PEM file"):
                    self.profiles.delete_pem(p, e, profile_id, pem.get("pem_file_id"))
        for public_key in sorted(planned_keys - existing_keys):
            logger.info(f"[trusted_token_profile] Adding PEM file to {profile_id}")
            with api_call("Failed to create PEM file"):
                self.profiles.create_pem(p, e, profile_id, public_key)
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e, profile_id = state["project_slug"], state["environment_slug"], state["profile_id"]
        logger.info(f"[trusted_token_profile] Deleting profile {profile_id} for {p}/{e}")
        with api_call("Failed to delete trusted token profile"):
            self.profiles.delete(p, e, profile_id)
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "profile_id"])
        return {"id": import_id, **parts}
