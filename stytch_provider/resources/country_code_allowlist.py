"""stytch_country_code_allowlist: countries allowed for SMS or WhatsApp OTPs."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema
from ..core.stytch import DEFAULT_COUNTRY_CODES, DELIVERY_METHODS, CountryCodeAllowlistService
from ..core.validators import each, one_of, parse_import_id, regex_matches
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


class CountryCodeAllowlistResource(Resource):
    """Manages a country code allowlist. Destroying it restores CA and US."""
    
    type_name = "stytch_country_code_allowlist"
    schema = Schema(
        version=1,
        description="Manages the country code allowlist for a delivery method.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute(
                "delivery_method",
                required=True,
                validators=[one_of(*DELIVERY_METHODS)],
                plan_modifiers=[requires_replace],
            ),
            Attribute(
                "country_codes",
                kind="list",
                required=True,
                validators=[each(regex_matches(r"^[A-Z]{2}$", "must be an ISO 3166-1 alpha-2 country code"))],
            ),
            Attribute("last_updated", computed=True),
        ],
    )
    
    @property
    def allowlists(self) -> CountryCodeAllowlistService:
        return CountryCodeAllowlistService(self.client)
    
    @staticmethod
    def _from_api(p: str, e: str, method: str, codes: List[str], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}.{method}",
            "project_slug": p,
            "environment_slug": e,
            "delivery_method": method,
            "country_codes": list(codes),
            "last_updated": last_updated,
        }
    
    def _set(self, plan: Dict[str, Any], summary: str) -> Dict[str, Any]:
        p, e, method = plan["project_slug"], plan["environment_slug"], plan["delivery_method"]
        with api_call(summary):
            codes = self.allowlists.set(p, e, method, plan["country_codes"])
        return self._from_api(p, e, method, codes, timestamp())
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"[country_code_allowlist] Setting {plan['delivery_method']} allowlist for {plan['project_slug']}/{plan['environment_slug']}")
        return self._set(plan, "Failed to set country code allowlist")
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e, method = state["project_slug"], state["environment_slug"], state["delivery_method"]
        codes = fetch_or_none("Failed to get country code allowlist", self.allowlists.get, p, e, method)
        if codes is None:
            return None
        return self._from_api(p, e, method, codes, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        return self._set(plan, "Failed to update country code allowlist")
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e, method = state["project_slug"], state["environment_slug"], state["delivery_method"]
        logger.info(f"[country_code_allowlist] Resetting {method} allowlist for {p}/{e} to {DEFAULT_COUNTRY_CODES}")
        with api_call("Failed to reset country code allowlist"):
            self.allowlists.set(p, e, method, list(DEFAULT_COUNTRY_CODES))
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "delivery_method"])
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        method = prior["delivery_method"]
        with api_call("Failed to get country code allowlist"):
            codes = self.allowlists.get(project_slug, environment_slug, method)
        return self._from_api(project_slug, environment_slug, method, codes, timestamp())
