"""Redirect URLs, password config and RBAC policy."""
import pytest

from stytch_provider.core.diagnostics import DiagnosticError
from stytch_provider.core.legacy_resolver import MissingIdentifierError
from stytch_provider.core.stytch import StytchAPIError, StytchNotFoundError
from stytch_provider.resources.password_config import PasswordConfigResource
from stytch_provider.resources.rbac_policy import RBACPolicyResource
from stytch_provider.resources.redirect_url import RedirectURLResource

ENV = "/pwa/v3/projects/myproj/environments/production"
URL = "https://app.example.com/callback"


class TestRedirectURL:
    @pytest.fixture()
    def resource(self, api):
        return RedirectURLResource(api)

    def test_create_disables_default_promotion(self, resource, api):
        api.post.return_value = {
            "redirect_url": {"url": URL, "valid_types": [{"type": "SIGNUP", "is_default": False}, {"type": "LOGIN", "is_default": True}]}
        }
        plan = {
            "project_slug": "myproj",
            "environment_slug": "production",
            "url": URL,
            "valid_types": [{"type": "SIGNUP", "is_default": False}, {"type": "LOGIN", "is_default": True}],
        }
        state = resource.create(plan)

        path = api.post.call_args.args[0]
        payload = api.post.call_args.kwargs["json"]
        assert path == f"{ENV}/redirect_urls"
        assert payload["do_not_promote_defaults"] is True
        assert [vt["type"] for vt in payload["valid_types"]] == ["LOGIN", "SIGNUP"]
        assert state["id"] == f"myproj.production.{URL}"

    def test_delete_sends_url_as_query(self, resource, api):
        resource.delete({"project_slug": "myproj", "environment_slug": "production", "url": URL})
        api.delete.assert_called_once_with(
            f"{ENV}/redirect_urls",
            params={"url": URL, "do_not_promote_defaults": "true"},
        )

    @pytest.mark.parametrize(
        "valid_types",
        [[], [{"type": "LOGOUT", "is_default": True}], [{"type": "LOGIN"}]],
    )
    def test_invalid_valid_types(self, resource, valid_types):
        diags = resource.validate_config(
            {"project_slug": "p", "environment_slug": "e", "url": URL, "valid_types": valid_types}
        )
        assert diags.has_error()
        assert diags[0].attribute == "valid_types"

    def test_import_keeps_dots_in_url(self, resource):
        state = resource.import_state(f"myproj.production.{URL}")
        assert state["url"] == URL
        assert state["environment_slug"] == "production"

    def test_upgrade_v0(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-test-xyz789": migration_body,
            "/pwa/v3/projects/myproj/environments/test/redirect_urls": {
                "redirect_url": {"url": URL, "valid_types": [{"type": "LOGIN", "is_default": True}]}
            },
        })
        state = resource.upgrade_state(0, {"project_id": "project-test-xyz789", "url": URL})
        assert state["project_slug"] == "myproj"
        assert state["environment_slug"] == "test"
        assert state["valid_types"] == [{"type": "LOGIN", "is_default": True}]

    def test_upgrade_v0_without_project_id(self, resource, api):
        with pytest.raises(MissingIdentifierError):
            resource.upgrade_state(0, {"url": URL})
        api.get.assert_not_called()


class TestPasswordConfig:
    @pytest.fixture()
    def resource(self, api):
        return PasswordConfigResource(api)

    def test_luds_fields_rejected_under_zxcvbn(self, resource):
        diags = resource.validate_config({
            "project_slug": "p",
            "environment_slug": "e",
            "validation_policy": "ZXCVBN",
            "luds_min_password_length": 10,
        })
        assert [d.summary for d in diags] == ["Invalid Attribute Configuration"]
        assert diags[0].attribute == "luds_min_password_length"

    @pytest.mark.parametrize("field, value", [("luds_min_password_length", 7), ("luds_min_password_complexity", 5)])
    def test_luds_ranges(self, resource, field, value):
        diags = resource.validate_config(
            {"project_slug": "p", "environment_slug": "e", "validation_policy": "LUDS", field: value}
        )
        assert diags[0].summary == "Invalid Attribute Value"

    def test_create_sends_luds_fields(self, resource, api):
        api.put.return_value = {"password_strength_config": {
            "validation_policy": "LUDS", "luds_min_password_length": 12, "luds_min_password_complexity": 3,
        }}
        plan = resource.plan({
            "project_slug": "myproj",
            "environment_slug": "production",
            "validation_policy": "LUDS",
            "luds_min_password_length": 12,
            "luds_min_password_complexity": 3,
        }).values
        state = resource.create(plan)

        payload = api.put.call_args.kwargs["json"]
        assert api.put.call_args.args[0] == f"{ENV}/password_strength_config"
        assert payload["luds_min_password_length"] == 12
        assert payload["check_breach_on_creation"] is False
        assert state["id"] == "myproj.production"
        assert state["validation_policy"] == "LUDS"

    def test_delete_resets_to_defaults(self, resource, api):
        resource.delete({"project_slug": "myproj", "environment_slug": "production"})
        assert api.put.call_args.kwargs["json"] == {
            "check_breach_on_creation": True,
            "check_breach_on_authentication": True,
            "validate_on_authentication": True,
            "validation_policy": "ZXCVBN",
        }

    def test_import(self, resource):
        assert resource.import_state("myproj.production")["environment_slug"] == "production"


class TestRBACPolicy:
    @pytest.fixture()
    def resource(self, api):
        return RBACPolicyResource(api)

    def config(self, **extra):
        return {"project_slug": "myproj", "environment_slug": "production", **extra}

    def test_stytch_user_rejected_for_b2b(self, resource, api):
        api.get.return_value = {"project": {"project_slug": "myproj", "vertical": "B2B"}}
        diags = resource.validate_config(self.config(stytch_user={"permissions": []}))
        assert diags.has_error()
        assert diags.errors()[0].summary == "Invalid field for B2B project"

    def test_member_rejected_for_consumer(self, resource, api):
        api.get.return_value = {"project": {"project_slug": "myproj", "vertical": "CONSUMER"}}
        diags = resource.validate_config(self.config(stytch_admin={"permissions": []}))
        assert diags.errors()[0].summary == "Invalid field for Consumer project"

    def test_vertical_lookup_failure_is_a_warning(self, resource, api):
        api.get.side_effect = StytchAPIError(500, "boom", "/x")
        diags = resource.validate_config(self.config(stytch_user={"permissions": []}))
        assert not diags.has_error()
        assert diags[0].severity == "warning"

    def test_offline_validation_skips_vertical_check(self):
        diags = RBACPolicyResource(None).validate_config(self.config(stytch_user={"permissions": []}))
        assert diags == []

    def test_custom_role_needs_role_id(self, resource):
        diags = resource.validate_config(self.config(custom_roles=[{"description": "no id"}]))
        assert diags[0].attribute == "custom_roles"

    def test_create_sends_policy(self, resource, api):
        api.put.return_value = {"policy": {
            "stytch_user": {"role_id": "stytch_user", "permissions": [{"resource_id": "docs", "actions": ["write", "read"]}]},
            "custom_resources": [{"resource_id": "docs", "available_actions": ["write", "read"]}],
        }}
        plan = resource.plan(self.config(
            stytch_user={"permissions": [{"resource_id": "docs", "actions": ["read", "write"]}]},
            custom_resources=[{"resource_id": "docs", "available_actions": ["read", "write"]}],
        )).values
        state = resource.create(plan)

        policy = api.put.call_args.kwargs["json"]["policy"]
        assert policy["stytch_user"]["role_id"] == "stytch_user"
        assert "stytch_member" not in policy
        assert policy["custom_roles"] == []
        assert state["stytch_user"]["permissions"] == [{"resource_id": "docs", "actions": ["read", "write"]}]
        assert state["custom_resources"][0]["available_actions"] == ["read", "write"]

    def test_delete_strips_custom_resources(self, resource, api):
        api.get.return_value = {"policy": {
            "stytch_user": {"role_id": "stytch_user", "permissions": [
                {"resource_id": "docs", "actions": ["read"]},
                {"resource_id": "stytch.self", "actions": ["*"]},
            ]},
            "custom_roles": [{"role_id": "editor"}],
            "custom_resources": [{"resource_id": "docs"}],
            "custom_scopes": [{"scope": "read:docs"}],
        }}
        resource.delete({"project_slug": "myproj", "environment_slug": "production"})

        policy = api.put.call_args.kwargs["json"]["policy"]
        assert policy["stytch_user"]["permissions"] == [{"resource_id": "stytch.self", "actions": ["*"]}]
        assert policy["custom_roles"] == []
        assert policy["custom_resources"] == []
        assert policy["custom_scopes"] == []

    def test_read_gone(self, resource, api):
        api.get.side_effect = StytchNotFoundError(404, "gone", "/x")
        assert resource.read({"project_slug": "myproj", "environment_slug": "production"}) is None

    def test_set_failure(self, resource, api):
        api.put.side_effect = StytchAPIError(400, "bad policy", "/x")
        with pytest.raises(DiagnosticError, match="Failed to set RBAC policy"):
            resource.create(resource.plan(self.config()).values)
