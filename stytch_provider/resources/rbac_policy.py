"""stytch_rbac_policy: the RBAC policy document of an environment."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from ..core.diagnostics import Diagnostics
from ..core.plan_modifiers import requires_replace, use_state_for_unknown
from ..core.schema import Attribute, Schema, is_known, known
from ..core.stytch import ProjectService, RBACPolicyService, StytchError
from ..core.validators import each, parse_import_id
from .base import Resource, api_call, fetch_or_none, timestamp

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("stytch_member", "stytch_admin", "stytch_user")
B2B_ONLY_ROLES = ("stytch_member", "stytch_admin")


def _permissions(value: Any) -> None:
    for permission in value or []:
        if not isinstance(permission, dict) or not permission.get("resource_id"):
            raise ValueError("each permission needs a resource_id")
        if not isinstance(permission.get("actions", []), (list, tuple)):
            raise ValueError("permission actions must be a list of strings")


def _custom_role(value: Any) -> None:
    if not isinstance(value, dict) or not value.get("role_id"):
        raise ValueError("each custom role needs a role_id")
    _permissions(value.get("permissions"))


def _custom_resource(value: Any) -> None:
    if not isinstance(value, dict) or not value.get("resource_id"):
        raise ValueError("each custom resource needs a resource_id")


def _custom_scope(value: Any) -> None:
    if not isinstance(value, dict) or not value.get("scope"):
        raise ValueError("each custom scope needs a scope")
    _permissions(value.get("permissions"))


def _default_role_attribute(name: str) -> Attribute:
    return Attribute(
        name,
        kind="object",
        optional=True,
        computed=True,
        plan_modifiers=[use_state_for_unknown],
        attributes=[
            Attribute("role_id", computed=True),
            Attribute("description", optional=True, computed=True),
            Attribute("permissions", kind="list", optional=True, computed=True, validators=[_permissions]),
        ],
    )


def _role(role: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not role:
        return None
    return {
        "role_id": role.get("role_id", ""),
        "description": role.get("description", ""),
        "permissions": [
            {"resource_id": p["resource_id"], "actions": sorted(p.get("actions") or [])}
            for p in role.get("permissions") or []
        ],
    }


class RBACPolicyResource(Resource):
    """Manages the RBAC policy for an environment.
    
    ``stytch_member`` and ``stytch_admin`` only exist in B2B projects,
    ``stytch_user`` only in consumer projects. Destroying the resource
    removes custom roles, resources and scopes and strips permissions on
    custom resources from the default roles.
    """
    
    type_name = "stytch_rbac_policy"
    schema = Schema(
        description="Manages the RBAC policy for an environment.",
        attributes=[
            Attribute("id", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("project_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("environment_slug", required=True, plan_modifiers=[requires_replace]),
            Attribute("last_updated", computed=True),
            _default_role_attribute("stytch_member"),
            _default_role_attribute("stytch_admin"),
            _default_role_attribute("stytch_user"),
            Attribute("stytch_resources", kind="set", computed=True, plan_modifiers=[use_state_for_unknown]),
            Attribute("custom_roles", kind="set", optional=True, computed=True, validators=[each(_custom_role)]),
            Attribute("custom_resources", kind="set", optional=True, computed=True, validators=[each(_custom_resource)]),
            Attribute("custom_scopes", kind="set", optional=True, computed=True, validators=[each(_custom_scope)]),
        ],
    )
    
    @property
    def rbac(self) -> RBACPolicyService:
        return RBACPolicyService(self.client)
    
    def validate_resource(self, config: Dict[str, Any]) -> Diagnostics:
        diags = Diagnostics()
        # Offline validation has no client; the vertical check needs the API.
        if self.client is None or not is_known(config.get("project_slug")):
            return diags
        try:
            project = ProjectService(self.client).get(config["project_slug"])
        except StytchError as exc:
            diags.add_warning("Failed to get project for vertical check", str(exc))
            return diags
        
        vertical = project.get("vertical")
        if vertical == "B2B" and is_known(config.get("stytch_user")):
            diags.add_error("Invalid field for B2B project", "stytch_user field can only be used with Consumer projects")
        if vertical == "CONSUMER":
            for name in B2B_ONLY_ROLES:
                if is_known(config.get(name)):
                    diags.add_error("Invalid field for Consumer project", f"{name} field can only be used with B2B projects")
        return diags
    
    @staticmethod
    def _to_policy(plan: Dict[str, Any]) -> Dict[str, Any]:
        policy: Dict[str, Any] = {}
        for name in DEFAULT_ROLES:
            role = known(plan.get(name))
            if role:
                policy[name] = {
                    "role_id": name,
                    "description": known(role.get("description"), ""),
                    "permissions": known(role.get("permissions"), []),
                }
        policy["custom_roles"] = list(known(plan.get("custom_roles"), []))
        policy["custom_resources"] = list(known(plan.get("custom_resources"), []))
        policy["custom_scopes"] = list(known(plan.get("custom_scopes"), []))
        return policy
    
    @staticmethod
    def _from_api(p: str, e: str, policy: Dict[str, Any], last_updated: Optional[str]) -> Dict[str, Any]:
        return {
            "id": f"{p}.{e}",
            "project_slug": p,
            "environment_slug": e,
            "last_updated": last_updated,
            "stytch_member": _role(policy.get("stytch_member")),
            "stytch_admin": _role(policy.get("stytch_admin")),
            "stytch_user": _role(policy.get("stytch_user")),
            "stytch_resources": policy.get("stytch_resources") or [],
            "custom_roles": [_role(r) for r in policy.get("custom_roles") or []],
            "custom_resources": [
                {
                    "resource_id": r["resource_id"],
                    "description": r.get("description", ""),
                    "available_actions": sorted(r.get("available_actions") or []),
                }
                for r in policy.get("custom_resources") or []
            ],
            "custom_scopes": [
                {
                    "scope": s["scope"],
                    "description": s.get("description", ""),
                    "permissions": _role(s)["permissions"],
                }
                for s in policy.get("custom_scopes") or []
            ],
        }
    
    def create(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        logger.info(f"[rbac_policy] Creating RBAC policy for {p}/{e}")
        with api_call("Failed to set RBAC policy"):
            policy = self.rbac.set(p, e, self._to_policy(plan))
        return self._from_api(p, e, policy, timestamp())
    
    def read(self, state: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[rbac_policy] Reading RBAC policy for {p}/{e}")
        policy = fetch_or_none("Failed to get RBAC policy", self.rbac.get, p, e)
        if policy is None:
            return None
        return self._from_api(p, e, policy, state.get("last_updated"))
    
    def update(self, plan: Dict[str, Any], state: Dict[str, Any]) -> Dict[str, Any]:
        p, e = plan["project_slug"], plan["environment_slug"]
        logger.info(f"[rbac_policy] Updating RBAC policy for {p}/{e}")
        with api_call("Failed to set RBAC policy"):
            policy = self.rbac.set(p, e, self._to_policy(plan))
        return self._from_api(p, e, policy, timestamp())
    
    def delete(self, state: Dict[str, Any]) -> None:
        p, e = state["project_slug"], state["environment_slug"]
        logger.info(f"[rbac_policy] Deleting RBAC policy for {p}/{e} (resetting to defaults)")
        with api_call("Failed to get RBAC policy"):
            policy = self.rbac.get(p, e)
        
        custom_resource_ids = {r["resource_id"] for r in policy.get("custom_resources") or []}
        for name in DEFAULT_ROLES:
            role = policy.get(name)
            if role:
                role["permissions"] = [
                    perm for perm in role.get("permissions") or []
                    if perm.get("resource_id") not in custom_resource_ids
                ]
        policy["custom_roles"] = []
        policy["custom_resources"] = []
        policy["custom_scopes"] = []
        
        with api_call("Failed to reset RBAC policy"):
            self.rbac.set(p, e, policy)
    
    def import_state(self, import_id: str) -> Dict[str, Any]:
        parts = parse_import_id(import_id, ["project_slug", "environment_slug"])
        return {"id": import_id, **parts}

