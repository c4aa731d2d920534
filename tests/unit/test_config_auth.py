"""Tests for settings, credentials and logging setup."""

import base64
import logging

import keyring
import pytest
import structlog
from keyring.errors import NoKeyringError, PasswordDeleteError

from microjpeg.auth import SecureAPIKeyManager, basic_auth_header
from microjpeg.exceptions import ArgumentError
from microjpeg.config import DEFAULT_BASE_URL, MicroJpegSettings
from microjpeg.logging import filter_sensitive_data, get_logger, setup_logging


class TestSettings:
    def test_defaults(self):
        settings = MicroJpegSettings(_env_file=None)

        assert settings.api_key is None
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 120.0
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MICROJPEG_API_KEY", "env-key")
        monkeypatch.setenv("MICROJPEG_BASE_URL", "https://staging.microjpeg.com/v1")
        monkeypatch.setenv("MICROJPEG_LOG_LEVEL", "debug")

        settings = MicroJpegSettings(_env_file=None)

        assert settings.api_key == "env-key"
        assert settings.base_url == "https://staging.microjpeg.com/v1/"
        assert settings.log_level == "DEBUG"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("MICROJPEG_API_KEY=file-key\nMICROJPEG_TIMEOUT=30\n")

        settings = MicroJpegSettings(_env_file=env_file)

        assert settings.api_key == "file-key"
        assert settings.timeout == 30.0


class TestAuth:
    def test_basic_auth_header(self):
        header = basic_auth_header("secret-key")

        scheme, token = header["Authorization"].split(" ")
        assert scheme == "Basic"
        assert base64.b64decode(token) == b"api:secret-key"

    def test_keychain_round_trip(self, monkeypatch):
        store = {}
        monkeypatch.setattr(keyring, "set_password", lambda s, u, p: store.__setitem__((s, u), p))
        monkeypatch.setattr(keyring, "get_password", lambda s, u: store.get((s, u)))

        def delete(service, username):
            if (service, username) not in store:
                raise PasswordDeleteError("not found")
            del store[(service, username)]

        monkeypatch.setattr(keyring, "delete_password", delete)
        manager = SecureAPIKeyManager()

        assert manager.store_api_key("default", "mj_live_123")
        assert manager.retrieve_api_key() == "mj_live_123"
        assert ("microjpeg", "MJ_API_default") in store
        assert manager.delete_api_key("default")
        assert manager.retrieve_api_key() is None
        assert not manager.delete_api_key("default")

    def test_missing_keyring_backend(self, monkeypatch):
        def no_backend(*args):
            raise NoKeyringError("no backend")

        monkeypatch.setattr(keyring, "get_password", no_backend)
        monkeypatch.setattr(keyring, "set_password", no_backend)

        manager = SecureAPIKeyManager()

        assert manager.retrieve_api_key() is None
        assert manager.store_api_key("default", "k") is False

    def test_non_ascii_key_is_an_argument_error(self):
        with pytest.raises(ArgumentError):
            basic_auth_header("cl\u00e9-secr\u00e8te")


class TestLogging:
    def test_credentials_are_redacted(self):
        event = {
            "event": "request.sent",
            "api_key": "secret",
            "headers": {"Authorization": "Basic abc"},
            "endpoint": "compress",
        }

        filtered = filter_sensitive_data(None, None, event)

        assert filtered["api_key"] == "***REDACTED***"
        assert filtered["headers"]["Authorization"] == "***REDACTED***"
        assert filtered["endpoint"] == "compress"

    def test_setup_logging_sets_level(self):
        setup_logging("DEBUG", json_logs=True)

        assert logging.getLogger().level == logging.DEBUG
        assert get_logger("microjpeg.test") is not None

        setup_logging("WARNING")

    def test_disabled_levels_skip_the_processor_chain(self):
        seen = []

        def record(_, method_name, event_dict):
            seen.append(method_name)
            raise structlog.DropEvent

        logging.getLogger("microjpeg.tests.levels").setLevel(logging.WARNING)
        structlog.configure(processors=[record])
        try:
            logger = get_logger("microjpeg.tests.levels")
            logger.debug("request.sent", endpoint="compress")
            logger.warning("response.slow", endpoint="compress")
        finally:
            structlog.reset_defaults()

        assert seen == ["warning"]
