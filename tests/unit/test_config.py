"""Unit tests for configuration schema."""

import pytest
from pydantic import ValidationError

import promptscan.config as config_module
from promptscan.config import Config, LoggingConfig, get_config, reload_config

pytestmark = [pytest.mark.unit, pytest.mark.config]

ENV_VARS = (
    "DEDUP_MAX_ITEMS",
    "DEDUP_ALLOW_LARGE_DATASETS",
    "DEDUP_TIMEOUT_MS",
    "DEDUP_YIELD_INTERVAL_MS",
    "DEDUP_TITLE_THRESHOLD",
    "DEDUP_CONTENT_THRESHOLD",
    "DEDUP_BUCKET_SIZE",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate each test from the caller's environment and any local .env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_config", None)


class TestLoggingConfig:
    """Test logging configuration validation."""

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == "INFO"
        assert "%(message)s" in config.format

    def test_level_is_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert LoggingConfig().level == "WARNING"


class TestConfig:
    """Test main configuration."""

    def test_defaults(self):
        config = Config()

        assert config.max_items == 1000
        assert config.allow_large_datasets is False
        assert config.timeout_ms == 10000
        assert config.yield_interval_ms == 50
        assert config.title_threshold == 0.8
        assert config.content_threshold == 0.9
        assert config.bucket_size == 100
        assert config.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DEDUP_MAX_ITEMS", "250")
        monkeypatch.setenv("DEDUP_ALLOW_LARGE_DATASETS", "true")
        monkeypatch.setenv("DEDUP_TIMEOUT_MS", "3000")
        monkeypatch.setenv("DEDUP_CONTENT_THRESHOLD", "0.95")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = Config()

        assert config.max_items == 250
        assert config.allow_large_datasets is True
        assert config.timeout_ms == 3000
        assert config.content_threshold == 0.95
        assert config.log_level == "DEBUG"

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text("DEDUP_BUCKET_SIZE=250\n")
        assert Config().bucket_size == 250

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_items", 0),
            ("max_items", 100001),
            ("timeout_ms", 0),
            ("yield_interval_ms", -1),
            ("title_threshold", 1.5),
            ("content_threshold", -0.1),
            ("bucket_size", 0),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Config(**{field: value})

    def test_invalid_env_value(self, monkeypatch):
        monkeypatch.setenv("DEDUP_MAX_ITEMS", "many")
        with pytest.raises(ValidationError):
            Config()


class TestValidateConfiguration:
    def test_defaults_have_no_issues(self):
        assert Config().validate_configuration() == []

    def test_low_thresholds(self):
        issues = Config(title_threshold=0.3, content_threshold=0.4).validate_configuration()

        assert any("DEDUP_CONTENT_THRESHOLD" in issue for issue in issues)
        assert any("DEDUP_TITLE_THRESHOLD" in issue for issue in issues)

    def test_large_datasets_with_long_timeout(self):
        issues = Config(allow_large_datasets=True, timeout_ms=120000).validate_configuration()
        assert any("DEDUP_ALLOW_LARGE_DATASETS" in issue for issue in issues)

    def test_long_timeout_alone_is_fine(self):
        assert Config(timeout_ms=120000).validate_configuration() == []

    def test_small_buckets(self):
        issues = Config(bucket_size=10).validate_configuration()
        assert any("DEDUP_BUCKET_SIZE" in issue for issue in issues)


class TestGlobalConfig:
    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config_picks_up_env(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("DEDUP_TIMEOUT_MS", "1234")

        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.timeout_ms == 1234
        assert get_config() is reloaded
