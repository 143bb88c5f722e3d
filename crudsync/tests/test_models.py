"""Tests for ResourceSettings and library defaults."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from crudsync import ResourceSettings, config


class TestDefaults:
    def test_defaults(self):
        settings = ResourceSettings()
        assert settings.primary_key == config.settings.PRIMARY_KEY
        assert settings.plural is None
        assert settings.json_body is False
        assert settings.headers == {}
        assert settings.list_transform is None
        assert settings.item_transform is None
        assert settings.available_operations == "CRUD"
        assert settings.reset_action_type == config.settings.RESET_ACTION_TYPE
        assert settings.merge_on_write is False
        assert settings.initial_data is None
        assert settings.response_type == "json"

    def test_library_defaults(self):
        assert config.settings.HTTP_TIMEOUT > 0
        assert config.settings.NETWORK_ERROR_MESSAGE == "Network error"


class TestOperations:
    def test_lowercase_normalized(self):
        assert ResourceSettings(available_operations="rd").available_operations == "RD"

    @pytest.mark.parametrize(
        "operations, can_save, can_delete",
        [
            ("R", False, False),
            ("C", True, False),
            ("U", True, False),
            ("CRU", True, False),
            ("RD", False, True),
            ("CRUD", True, True),
        ],
    )
    def test_capabilities(self, operations, can_save, can_delete):
        settings = ResourceSettings(available_operations=operations)
        assert settings.can_save is can_save
        assert settings.can_delete is can_delete

    @pytest.mark.parametrize("operations", ["", "CRUX", "read"])
    def test_invalid_rejected(self, operations):
        with pytest.raises(ValidationError):
            ResourceSettings(available_operations=operations)


class TestValidation:
    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            ResourceSettings(primaryKey="uuid")

    def test_frozen(self):
        settings = ResourceSettings()
        with pytest.raises(ValidationError):
            settings.merge_on_write = True

    def test_empty_primary_key_rejected(self):
        with pytest.raises(ValidationError):
            ResourceSettings(primary_key="")

    def test_unknown_response_type_rejected(self):
        with pytest.raises(ValidationError):
            ResourceSettings(response_type="xml")

    def test_headers_callable_kept(self):
        def headers():
            return {"Authorization": "Bearer t"}

        assert ResourceSettings(headers=headers).headers is headers

    def test_transforms_must_be_callable(self):
        with pytest.raises(ValidationError):
            ResourceSettings(list_transform="not callable")


class TestEnvironment:
    def test_timeout_parsed_from_env(self, monkeypatch):
        monkeypatch.setenv("CRUDSYNC_HTTP_TIMEOUT", "2.5")
        assert config._float_env("CRUDSYNC_HTTP_TIMEOUT", "30.0") == 2.5

    def test_timeout_default(self, monkeypatch):
        monkeypatch.delenv("CRUDSYNC_HTTP_TIMEOUT", raising=False)
        assert config._float_env("CRUDSYNC_HTTP_TIMEOUT", "30.0") == 30.0

    def test_non_numeric_timeout_is_runtime_error(self, monkeypatch):
        monkeypatch.setenv("CRUDSYNC_HTTP_TIMEOUT", "abc")
        with pytest.raises(RuntimeError, match="CRUDSYNC_HTTP_TIMEOUT"):
            config._float_env("CRUDSYNC_HTTP_TIMEOUT", "30.0")
