"""Tests for settings and logging setup."""
import json
import logging

from laundrypro.config.logging import build_logging_config, setup_logging
from laundrypro.config.settings import Settings, get_settings
from laundrypro.core.logging import JSONFormatter, get_service_logger, mask_phone


class TestSettings:

    def test_defaults(self, settings):
        assert settings.REQUEST_TIMEOUT == 15.0
        assert settings.DEFAULT_COUNTRY_CODE == "+84"
        assert settings.OTP_LENGTH == 6
        assert settings.api_url == "http://laundrypro.test/v1"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "http://10.0.2.2:5000/")
        monkeypatch.setenv("REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("log_level", "debug")

        settings = Settings(_env_file=None)

        assert settings.api_url == "http://10.0.2.2:5000/v1"
        assert settings.REQUEST_TIMEOUT == 5.0
        assert settings.LOG_LEVEL == "debug"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:

    def test_console_only_without_log_dir(self, settings):
        config = build_logging_config(settings)

        assert set(config["handlers"]) == {"console"}
        assert config["loggers"]["laundrypro"]["level"] == "INFO"
        assert config["loggers"]["aiohttp"]["level"] == "WARNING"

    def test_unknown_format_falls_back_to_simple(self):
        settings = Settings(LOG_FORMAT="fancy", _env_file=None)
        assert build_logging_config(settings)["handlers"]["console"]["formatter"] == "simple"

    def test_log_dir_adds_rotating_files(self, tmp_path):
        settings = Settings(LOG_DIR=str(tmp_path / "logs"), LOG_FORMAT="json", _env_file=None)

        logger = setup_logging(settings)
        logger.info("started")

        assert (tmp_path / "logs").is_dir()
        assert (tmp_path / "logs" / "laundrypro.log").exists()
        handlers = build_logging_config(settings)["loggers"]["laundrypro"]["handlers"]
        assert handlers == ["console", "file", "error_file"]

        # Leave no file handlers open for later tests
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_json_formatter_includes_extras(self):
        record = logging.LogRecord("laundrypro.test", logging.INFO, __file__, 1, "API GET /orders", None, None)
        record.request_id = "abc123"
        record.status = 200
        record.duration = 12.5

        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "API GET /orders"
        assert entry["request_id"] == "abc123"
        assert entry["status"] == 200
        assert entry["duration_ms"] == 12.5
        assert "user_id" not in entry

    def test_mask_phone(self):
        assert mask_phone("+84788876568") == "+847*****568"
        assert mask_phone("12345") == "*****"
        assert mask_phone(None) is None

    def test_service_logger_name(self):
        assert get_service_logger("auth").name == "laundrypro.auth"
