"""JWT templates, event log streaming and trusted token profiles."""
import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from stytch_provider.core.diagnostics import DiagnosticError
from stytch_provider.resources.event_log_streaming import EventLogStreamingResource
from stytch_provider.resources.jwt_template import JWTTemplateResource
from stytch_provider.resources.trusted_token_profile import TrustedTokenProfileResource

ENV = "/pwa/v3/projects/myproj/environments/production"
API_KEY = "0123456789abcdef0123456789abcdef"


def make_pem():
    key = ec.generate_private_key(ec.SECP256R1())
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


class TestJWTTemplate:
    @pytest.fixture()
    def resource(self, api):
        return JWTTemplateResource(api)

    def test_create(self, resource, api):
        api.put.return_value = {"jwt_template": {"template_content": '{"role": "{{ user.role }}"}', "custom_audience": ""}}
        plan = resource.plan({
            "project_slug": "myproj",
            "environment_slug": "production",
            "template_type": "SESSION",
            "template_content": '{"role": "{{ user.role }}"}',
        }).values
        state = resource.create(plan)

        api.put.assert_called_once_with(
            f"{ENV}/jwt_templates/SESSION",
            json={"template_content": '{"role": "{{ user.role }}"}', "custom_audience": ""},
        )
        assert state["id"] == "myproj.production.SESSION"

    def test_invalid_type(self, resource):
        diags = resource.validate_config({
            "project_slug": "p", "environment_slug": "e", "template_type": "session", "template_content": "{}",
        })
        assert diags[0].attribute == "template_type"

    def test_delete_resets_template(self, resource, api):
        resource.delete({"project_slug": "myproj", "environment_slug": "production", "template_type": "M2M"})
        api.put.assert_called_once_with(
            f"{ENV}/jwt_templates/M2M",
            json={"template_content": "", "custom_audience": ""},
        )

    def test_upgrade_v0_uppercases_type(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/jwt_templates/M2M": {"jwt_template": {"template_content": "{}", "custom_audience": "aud"}},
        })
        state = resource.upgrade_state(0, {"project_id": "project-live-abc123", "template_type": "m2m"})
        assert state["template_type"] == "M2M"
        assert state["custom_audience"] == "aud"
        assert state["id"] == "myproj.production.M2M"


class TestEventLogStreaming:
    @pytest.fixture()
    def resource(self, api):
        return EventLogStreamingResource(api)

    def datadog_config(self, **extra):
        return {
            "project_slug": "myproj",
            "environment_slug": "production",
            "destination_type": "DATADOG",
            "datadog_config": {"site": "US", "api_key": API_KEY},
            **extra,
        }

    def masked(self, status="ACTIVE"):
        return {"event_log_streaming_config": {
            "destination_type": "DATADOG",
            "destination_config": {"datadog": {"site": "US", "api_key": "****cdef"}},
            "streaming_status": status,
        }}

    def test_valid_config(self, resource):
        assert resource.validate_config(self.datadog_config()) == []

    def test_missing_matching_block(self, resource):
        config = self.datadog_config()
        del config["datadog_config"]
        diags = resource.validate_config(config)
        assert [d.summary for d in diags] == ["Missing destination configuration"]

    def test_conflicting_block(self, resource):
        config = self.datadog_config(grafana_loki_config={"hostname": "h", "username": "u", "password": "p"})
        diags = resource.validate_config(config)
        assert diags[0].summary == "Conflicting destination configuration"

    @pytest.mark.parametrize("api_key", ["abc", "z" * 32])
    def test_api_key_format(self, resource, api_key):
        diags = resource.validate_config(self.datadog_config(datadog_config={"site": "US", "api_key": api_key}))
        assert diags[0].attribute == "datadog_config.api_key"

    def test_invalid_site(self, resource):
        diags = resource.validate_config(self.datadog_config(datadog_config={"site": "MARS", "api_key": API_KEY}))
        assert diags[0].attribute == "datadog_config.site"

    def test_create_then_enable(self, resource, api):
        api.post.return_value = {"event_log_streaming_config": {}}
        api.get.return_value = self.masked()
        plan = resource.plan(self.datadog_config(enabled=True)).values
        state = resource.create(plan)

        paths = [c.args[0] for c in api.post.call_args_list]
        assert paths == [f"{ENV}/event_log_streaming", f"{ENV}/event_log_streaming/DATADOG/enable"]
        assert api.post.call_args_list[0].kwargs["json"] == {
            "destination_type": "DATADOG",
            "destination_config": {"datadog": {"site": "US", "api_key": API_KEY}},
        }
        assert state["enabled"] is True
        assert state["datadog_config"]["api_key"] == API_KEY

    def test_create_disabled_does_not_enable(self, resource, api):
        api.post.return_value = {"event_log_streaming_config": {}}
        api.get.return_value = self.masked(status="DISABLED")
        state = resource.create(resource.plan(self.datadog_config()).values)
        assert api.post.call_count == 1
        assert state["enabled"] is False

    def test_read_keeps_secret_from_state(self, resource, api):
        api.get.return_value = self.masked()
        prior = {**self.datadog_config(), "enabled": True}
        state = resource.read(prior)
        assert state["datadog_config"] == {"site": "US", "api_key": API_KEY}
        assert state["streaming_status"] == "ACTIVE"

    def test_update_toggles_only_on_change(self, resource, api):
        api.put.return_value = {"event_log_streaming_config": {}}
        api.get.return_value = self.masked(status="DISABLED")
        prior = {**self.datadog_config(), "enabled": True}

        resource.update(resource.plan(self.datadog_config(enabled=False), prior).values, prior)
        api.post.assert_called_once_with(f"{ENV}/event_log_streaming/DATADOG/disable")

        api.post.reset_mock()
        resource.update(resource.plan(self.datadog_config(enabled=True), prior).values, prior)
        api.post.assert_not_called()

    def test_plan_preserves_api_key_when_unset(self, resource):
        prior = {**self.datadog_config(), "id": "myproj.production.DATADOG"}
        config = self.datadog_config(datadog_config={"site": "EU"})
        plan = resource.plan(config, prior)
        assert plan.values["datadog_config"] == {"site": "EU", "api_key": API_KEY}

    def test_redact_masks_password(self, resource):
        state = {"grafana_loki_config": {"hostname": "h", "username": "u", "password": "p"}}
        assert resource.schema.redact(state)["grafana_loki_config"]["password"] == "(sensitive value)"

    def test_upgrade_v0_copies_secrets(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/event_log_streaming/DATADOG": self.masked(),
        })
        prior = {
            "project_id": "project-live-abc123",
            "destination_type": "DATADOG",
            "datadog_config": {"site": "US", "api_key": API_KEY},
        }
        state = resource.upgrade_state(0, prior)
        assert state["project_slug"] == "myproj"
        assert state["datadog_config"]["api_key"] == API_KEY

    def test_upgrade_v0_uppercases_destination_type(self, resource, api, migration_body, route):
        route(api.get, {
            "/pwa/v3/migration/projects/project-live-abc123": migration_body,
            f"{ENV}/event_log_streaming/DATADOG": self.masked(),
        })
        prior = {
            "project_id": "project-live-abc123",
            "destination_type": "datadog",
            "datadog_config": {"site": "US", "api_key": API_KEY},
        }
        state = resource.upgrade_state(0, prior)
        assert state["destination_type"] == "DATADOG"
        assert state["id"] == "myproj.production.DATADOG"


class TestTrustedTokenProfile:
    @pytest.fixture()
    def resource(self, api):
        return TrustedTokenProfileResource(api)

    @pytest.fixture()
    def pem(self):
        return make_pem()

    def config(self, **extra):
        return {
            "project_slug": "myproj",
            "environment_slug": "production",
            "name": "external",
            "audience": "aud",
            "issuer": "https://issuer.example.com",
            "public_key_type": "PEM",
            **extra,
        }

    def profile(self, pem_files):
        return {"trusted_token_profile": {
            "profile_id": "ttp-1",
            "name": "external",
            "audience": "aud",
            "issuer": "https://issuer.example.com",
            "attribute_mapping": {"email": "email_address"},
            "public_key_type": "PEM",
            "pem_files": pem_files,
            "can_jit_provision": False,
        }}

    def test_pem_files_need_pem_type(self, resource, pem):
        diags = resource.validate_config(self.config(public_key_type="JWK", pem_files=[{"public_key": pem}]))
        assert [d.summary for d in diags] == ["Invalid Attribute Configuration"]

    def test_invalid_pem(self, resource):
        diags = resource.validate_config(self.config(pem_files=[{"public_key": "nope"}]))
        assert diags[0].attribute == "pem_files"

    def test_attribute_mapping_must_be_string_map(self, resource):
        diags = resource.validate_config(self.config(attribute_mapping_json='{"a": 1}'))
        assert "must be valid JSON object" in diags[0].detail

    def test_create(self, resource, api, pem):
        api.post.return_value = self.profile([{"pem_file_id": "pem-1", "public_key": pem}])
        plan = resource.plan(self.config(
            attribute_mapping_json=json.dumps({"email": "email_address"}),
            pem_files=[{"public_key": pem}],
        )).values
        state = resource.create(plan)

        body = api.post.call_args.kwargs["json"]
        assert body["pem_files"] == [pem]
        assert body["attribute_mapping"] == {"email": "email_address"}
        assert state["id"] == "myproj.production.ttp-1"
        assert state["pem_files"] == [{"pem_file_id": "pem-1", "public_key": pem}]

    def test_update_diffs_pem_files(self, resource, api, pem):
        kept, added = pem, make_pem()
        prior = {
            **self.config(),
            "profile_id": "ttp-1",
            "pem_files": [
                {"pem_file_id": "pem-1", "public_key": kept},
                {"pem_file_id": "pem-2", "public_key": "-----BEGIN PUBLIC KEY-----\nold\n-----END PUBLIC KEY-----\n"},
            ],
        }
        api.patch.return_value = self.profile([])
        api.get.return_value = self.profile([{"pem_file_id": "pem-1", "public_key": kept}, {"pem_file_id": "pem-3", "public_key": added}])
        plan = resource.plan(self.config(pem_files=[{"public_key": kept}, {"public_key": added}]), prior).values

        state = resource.update(plan, prior)

        api.delete.assert_called_once_with(f"{ENV}/trusted_token_profiles/ttp-1/pem_files/pem-2")
        api.post.assert_called_once_with(f"{ENV}/trusted_token_profiles/ttp-1/pem_files", json={"public_key": added})
        assert len(state["pem_files"]) == 2

    def test_import(self, resource):
        assert resource.import_state("myproj.production.ttp-1")["profile_id"] == "ttp-1"

    def test_import_bad_format(self, resource):
        with pytest.raises(DiagnosticError):
            resource.import_state("myproj.ttp-1")
