"""Email templates, default email templates, public tokens, secrets, SDK configs and country code allowlists."""
import pytest

from stytch_provider.core.diagnostics import DiagnosticError
from stytch_provider.core.stytch import StytchAPIError
from stytch_provider.resources.country_code_allowlist import CountryCodeAllowlistResource
from stytch_provider.resources.default_email_template import DefaultEmailTemplateResource
from stytch_provider.resources.email_template import EmailTemplateResource
from stytch_provider.resources.public_token import PublicTokenResource
from stytch_provider.resources.sdk_config import B2BSDKConfigResource, ConsumerSDKConfigResource
from stytch_provider.resources.secret import SecretResource

ENV = "/pwa/v3/projects/myproj/environments/production"
SLUGS = {"project_slug": "myproj", "environment_slug": "production"}


class TestEmailTemplate:
    @pytest.fixture()
    def resource(self, api):
        return EmailTemplateResource(api)

    def test_prebuilt_and_custom_are_exclusive(self, resource):
        diags = resource.validate_config({
            "project_slug": "myproj",
            "template_id": "welcome",
            "prebuilt_customization": {"button_color": "#000000"},
            "custom_html_customization": {"template_type": "LOGIN", "html_content": "<p>hi</p>"},
        })
        assert [d.summary for d in diags] == ["Invalid Attribute Combination"]

    def test_create_is_project_scoped(self, resource, api):
        api.post.return_value = {"email_template": {
            "template_id": "welcome",
            "name": "Welcome",
            "prebuilt_customization": {"button_color": "#000000", "button_border_radius": 4.0},
        }}
        plan = resource.plan({
            "project_slug": "myproj",
            "template_id": "welcome",
            "name": "Welcome",
            "prebuilt_customization": {"button_color": "#000000", "button_border_radius": 4.0},
        }).values
        state = resource.create(plan)

        api.post.assert_called_once_with(
            "/pwa/v3/projects/myproj/email_templates",
            json={
                "template_id": "welcome",
                "name": "Welcome",
                "prebuilt_customization": {"button_color": "#000000", "button_border_radius": 4.0},
            },
        )
        assert state["id"] == "myproj.welcome"
        assert state["custom_html_customization"] is None

    def test_delete(self, resource, api):
        resource.delete({"project_slug": "myproj", "template_id": "welcome"})
        api.delete.assert_called_once_with("/pwa/v3/projects/myproj/email_templates/welcome")

    def test_import(self, resource):
        assert resource.import_state("myproj.welcome") == {
            "id": "myproj.welcome",
            "project_slug": "myproj",
            "template_id": "welcome",
        }


class TestDefaultEmailTemplate:
    DEFAULT = "/pwa/v3/projects/myproj/email_templates/default/LOGIN"

    @pytest.fixture()
    def resource(self, api):
        return DefaultEmailTemplateResource(api)

    def config(self, **extra):
        return {"project_slug": "myproj", "email_template_type": "LOGIN", "template_id": "welcome", **extra}

    def test_valid_config(self, resource):
        assert resource.validate_config(self.config()) == []

    def test_invalid_email_template_type(self, resource):
        diags = resource.validate_config(self.config(email_template_type="NEWSLETTER"))
        assert diags[0].attribute == "email_template_type"

    def test_create_sets_default(self, resource, api):
        api.put.return_value = {}
        state = resource.create(resource.plan(self.config()).values)
        api.put.assert_called_once_with(self.DEFAULT, json={"template_id": "welcome"})
        assert state["id"] == "myproj.LOGIN"
        assert state["template_id"] == "welcome"
        assert state["last_updated"]

    def test_read_refreshes_template_id(self, resource, api):
        api.get.return_value = {"template_id": "welcome-v2"}
        state = resource.read({**self.config(), "id": "myproj.LOGIN", "last_updated": "then"})
        api.get.assert_called_once_with(self.DEFAULT)
        assert state["template_id"] == "welcome-v2"
        assert state["last_updated"] == "then"

    def test_read_missing_default_drops_state(self, resource, api):
        api.get.return_value = {"template_id": ""}
        assert resource.read(self.config()) is None

    def test_update_points_at_new_template(self, resource, api):
        api.put.return_value = {}
        prior = {**self.config(), "id": "myproj.LOGIN"}
        plan = resource.plan(self.config(template_id="welcome-v2"), prior)
        assert not plan.requires_replace
        resource.update(plan.values, prior)
        api.put.assert_called_once_with(self.DEFAULT, json={"template_id": "welcome-v2"})

    def test_set_failure_reported(self, resource, api):
        api.put.side_effect = StytchAPIError(400, "template not found", self.DEFAULT)
        with pytest.raises(DiagnosticError) as exc_info:
            resource.create(self.config())
        assert exc_info.value.summary == "Failed to set default email template"

    def test_delete_unsets_default(self, resource, api):
        resource.delete(self.config())
        api.delete.assert_called_once_with(self.DEFAULT)

    def test_import_splits_on_last_dot(self, resource):
        assert resource.import_state("my.proj.ONE_TIME_PASSCODE") == {
            "id": "my.proj.ONE_TIME_PASSCODE",
            "project_slug": "my.proj",
            "email_template_type": "ONE_TIME_PASSCODE",
        }

    @pytest.mark.parametrize("import_id", ["LOGIN", ".LOGIN", "myproj."])
    def test_import_bad_format(self, resource, import_id):
        with pytest.raises(DiagnosticError) as exc_info:
            resource.import_state(import_id)
        assert exc_info.value.summary == "Invalid Import ID"
        assert import_id in exc_info.value.detail


class TestPublicToken:
    @pytest.fixture()
    def resource(self, api):
        return PublicTokenResource(api)

    def test_create(self, resource, api):
        api.post.return_value = {"public_token": {"public_token": "public-token-test-1", "created_at": "now"}}
        state = resource.create(dict(SLUGS))
        api.post.assert_called_once_with(f"{ENV}/public_tokens")
        assert state["id"] == "myproj.production.public-token-test-1"

    def test_read_scans_list(self, resource, api):
        api.get.return_value = {"public_tokens": [
            {"public_token": "public-token-test-0"},
            {"public_token": "public-token-test-1", "created_at": "now"},
        ]}
        state = resource.read({**SLUGS, "public_token": "public-token-test-1"})
        assert state["created_at"] == "now"

    def test_read_missing_token(self, resource, api):
        api.get.return_value = {"public_tokens": []}
        assert resource.read({**SLUGS, "public_token": "public-token-test-1"}) is None

    def test_update_not_allowed(self, resource, api):
        with pytest.raises(DiagnosticError) as exc_info:
            resource.update({}, {})
        assert exc_info.value.summary == "Update not allowed"
        api.put.assert_not_called()

    def test_upgrade_v0(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/public_tokens": {"public_tokens": [{"public_token": "public-token-live-1"}]},
        })
        state = resource.upgrade_state(0, {"project_id": "project-live-abc123", "public_token": "public-token-live-1"})
        assert state["id"] == "myproj.production.public-token-live-1"

    def test_upgrade_v0_token_gone(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/public_tokens": {"public_tokens": []},
        })
        with pytest.raises(DiagnosticError, match="Public token not found"):
            resource.upgrade_state(0, {"project_id": "project-live-abc123", "public_token": "public-token-live-1"})


class TestSecret:
    @pytest.fixture()
    def resource(self, api):
        return SecretResource(api)

    def test_create_captures_secret_once(self, resource, api):
        api.post.return_value = {"secret": {"secret_id": "secret-test-1", "secret": "shh", "created_at": "now"}}
        state = resource.create(dict(SLUGS))
        assert state["secret"] == "shh"

    def test_read_keeps_secret_value(self, resource, api):
        api.get.return_value = {"secret": {"secret_id": "secret-test-1", "last_four": "abcd"}}
        state = resource.read({**SLUGS, "secret_id": "secret-test-1", "secret": "shh"})
        api.get.assert_called_once_with(f"{ENV}/secrets/secret-test-1")
        assert state["secret"] == "shh"

    def test_secret_is_sensitive(self, resource):
        assert resource.schema.redact({"secret": "shh"}) == {"secret": "(sensitive value)"}

    def test_update_not_allowed(self, resource):
        with pytest.raises(DiagnosticError, match="Update not allowed"):
            resource.update({}, {})

    def test_upgrade_v0_builds_state_from_prior(self, resource, api, migration_body, route):
        route(api.get, {"/pwa/v3/migration/projects/project-test-xyz789": migration_body})
        state = resource.upgrade_state(0, {
            "project_id": "project-test-xyz789",
            "secret_id": "secret-test-1",
            "secret": "shh",
            "created_at": "2024-01-01T00:00:00Z",
        })
        api.get.assert_called_once_with("/pwa/v3/migration/projects/project-test-xyz789")
        assert state["id"] == "myproj.test.secret-test-1"
        assert state["environment_slug"] == "test"
        assert state["secret"] == "shh"
        assert state["created_at"] == "2024-01-01T00:00:00Z"


class TestSDKConfig:
    def test_registered_under_vertical_type_names(self):
        assert ConsumerSDKConfigResource.type_name == "stytch_consumer_sdk_config"
        assert B2BSDKConfigResource.type_name == "stytch_b2b_sdk_config"
        assert ConsumerSDKConfigResource.schema.attribute("kind") is None

    def test_b2b_config_sent_verbatim(self, api):
        config = {"basic": {"enabled": True, "domains": ["https://app.example.com"]}}
        api.put.return_value = {"config": config}
        state = B2BSDKConfigResource(api).create({**SLUGS, "config": config})
        api.put.assert_called_once_with(f"{ENV}/sdk/b2b", json={"config": config})
        assert state["config"] == config
        assert state["id"] == "myproj.production"

    def test_consumer_read(self, api):
        config = {"basic": {"enabled": True}, "sessions": {"max_session_duration_minutes": 60}}
        api.get.return_value = {"config": config}
        state = ConsumerSDKConfigResource(api).read({**SLUGS, "last_updated": "then"})
        api.get.assert_called_once_with(f"{ENV}/sdk/consumer")
        assert state["config"] == config
        assert state["last_updated"] == "then"

    def test_basic_enabled_required(self, api):
        diags = ConsumerSDKConfigResource(api).validate_config({**SLUGS, "config": {"sessions": {}}})
        assert [d.summary for d in diags] == ["Missing basic configuration"]

    def test_delete_disables_sdk(self, api):
        api.put.return_value = {"config": {"basic": {"enabled": False}}}
        ConsumerSDKConfigResource(api).delete(dict(SLUGS))
        api.put.assert_called_once_with(f"{ENV}/sdk/consumer", json={"config": {"basic": {"enabled": False}}})
        api.delete.assert_not_called()

    def test_import(self, api):
        assert B2BSDKConfigResource(api).import_state("myproj.production") == {"id": "myproj.production", **SLUGS}


class TestCountryCodeAllowlist:
    @pytest.fixture()
    def resource(self, api):
        return CountryCodeAllowlistResource(api)

    def test_create(self, resource, api):
        api.put.return_value = {"country_codes": ["US", "GB"]}
        state = resource.create({**SLUGS, "delivery_method": "sms", "country_codes": ["US", "GB"]})
        api.put.assert_called_once_with(
            f"{ENV}/country_code_allowlists/sms", json={"country_codes": ["US", "GB"]}
        )
        assert state["country_codes"] == ["US", "GB"]

    def test_invalid_country_code(self, resource):
        diags = resource.validate_config({**SLUGS, "delivery_method": "sms", "country_codes": ["usa"]})
        assert diags[0].attribute == "country_codes"

    def test_delete_restores_defaults(self, resource, api):
        resource.delete({**SLUGS, "delivery_method": "whatsapp"})
        api.put.assert_called_once_with(
            f"{ENV}/country_code_allowlists/whatsapp", json={"country_codes": ["CA", "US"]}
        )

    def test_upgrade_v0(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/country_code_allowlists/sms": {"country_codes": ["CA"]},
        })
        state = resource.upgrade_state(0, {"project_id": "project-live-abc123", "delivery_method": "sms"})
        assert state["id"] == "myproj.production.sms"
        assert state["country_codes"] == ["CA"]
