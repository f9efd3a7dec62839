"""stytch_redirect_url: a redirect URL registered for an environment."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema
from ..core.stytch import REDIRECT_URL_TYPES, RedirectURLService
from ..core.validators import each, parse_import_id, size_at_least
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)


def _valid_type(value: Any) -> None:
    if not isinstance(value, dict):
        raise ValueError("each valid type must be an object with type and is_default")
    if value.get("type") not in REDIRECT_URL_TYPES:
        raise ValueError(f"type must be one of: {', '.join(REDIRECT_URL_TYPES)}, got: {value.get('type')!r}")
    if not isinstance(value.get("is_default"), bool):
        raise ValueError("is_default must be a bool")


def _normalize_valid_types(valid_types: Optional[List[dict]]) -> List[dict]:
    """Sorted list of {type, is_default}, so set comparison is order independent."""
    return sorted(
        ({"type": vt["type"], "is_default": bool(vt.get("is_default", False))} for vt in valid_types or []),
        key=lambda vt: (vt["type"], vt["is_default"]),
    )


class RedirectURLResource(Resource):
    """A redirect URL for an environment."""
    
    type_name = "stytch_redirect_url"
    schema = Schema(
        version=1,
        description="A redirect URL for an environment.",
        attributes=[
            Attribute(
                "id",
                computed=True,
                plan_modifiers=[use_state_for_unknown],
                description="Format: project_slug.environment_slug.url",
            ),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("last_updated", computed=True),
            Attribute("url", required=True, plan_modifiers=[requires_replace], description="The URL to redirect to."),
            Attribute(
                "valid_types",
                kind="set",
                required=True,
                validators=[size_at_least(1), each(_valid_type)],
                description="The set of valid types for the redirect URL.",
            ),
        ],
    )
    
    @property
    def redirect_urls(self) -> RedirectURLService:
        return RedirectURLService(self.client)
    
    @staticmethod
    def _from_api(
        project_slug: str,
        environment_slug: str,
        redirect_url: Dict[str, Any],
        last_updated: Optional[str],
    ) -> Dict[str, Any]:
        url = redirect_url["url"]
        return {
            "id": f"{project_slug}.{environment_slug}.{url}",
            "project_slug": project_slug,
            "environment_slug": environment_slug,
            "url": url,
            "valid_types": _normalize_valid_types(redirect_url.get("valid_types")) or None,
            "last_updated": last_updated,
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e, url = plan["project_slug"], plan["environment_slug"], plan["url"]
        logger.info(f"[redirect_url] Creating redirect URL {url} in {p}/{e}")
        with api_call("Failed to create redirect URL"):
            created = self.redirect_urls.create(p, e, url, _normalize_valid_types(plan["valid_types"]))
        return self._from_api(p, e, created, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e, url = state["project_slug"], state["environment_slug"], state["url"]
        logger.info(f"[redirect_url] Reading redirect URL {url} in {p}/{e}")
        redirect_url = fetch_or_none("Failed to get redirect URL", self.redirect_urls.get, p, e, url)
        if redirect_url is None:
            return None
        return self._from_api(p, e, redirect_url, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        p, e, url = plan["project_slug"], plan["environment_slug"], plan["url"]
        logger.info(f"[redirect_url] Updating redirect URL {url} in {p}/{e}")
        with api_call("Failed to update redirect URL"):
            updated = self.redirect_urls.update(p, e, url, _normalize_valid_types(plan["valid_types"]))
        return self._from_api(p, e, updated, timestamp())
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e, url = state["project_slug"], state["environment_slug"], state["url"]
        logger.info(f"[redirect_url] Deleting redirect URL {url} in {p}/{e}")
        with api_call("Failed to delete redirect URL"):
            self.redirect_urls.delete(p, e, url)
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        # URLs contain dots; everything after the second dot is the URL
        parts = parse_import_id(import_id, ["project_slug", "environment_slug", "url"], greedy_last=True)
        logger.info(f"[redirect_url] Importing redirect URL {parts['url']}")
        return {"id": import_id, **parts}
    
    def state_upgraders(self):
        return {0: self._upgrade_v0}
    
    def _upgrade_v0(self, prior: Dict[str, Any]) -> Dict[str, Any]:
        project_slug, environment_slug = self.resolver().resolve(prior.get("project_id") or "")
        with api_call("Failed to retrieve redirect URL"):
            redirect_url = self.redirect_urls.get(project_slug, environment_slug, prior["url"])
        return self._from_api(project_slug, environment_slug, redirect_url, timestamp())
