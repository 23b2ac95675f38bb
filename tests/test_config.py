"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from clipurl.core.errors import ConfigError
from clipurl.utils import ConfigManager


def write_config(path: Path, text: str) -> str:
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_defaults_without_file():
    config = ConfigManager()

    assert config.get("clipboard.poll_interval_milliseconds") == 5000
    assert config.get("storage.links_db_file") is None
    assert config.get("logging.level") == "INFO"
    assert config.get("missing.key", "fallback") == "fallback"


def test_user_file_is_merged_over_defaults(tmp_path: Path):
    path = write_config(tmp_path / "clipurl.yaml", (
        "clipboard:\n"
        "  poll_interval_milliseconds: 250\n"
        "storage:\n"
        "  log_file: /tmp/links.txt\n"
    ))

    config = ConfigManager(path)

    assert config.get("clipboard.poll_interval_milliseconds") == 250
    assert config.get("storage.log_file") == "/tmp/links.txt"
    assert config.get("storage.links_db_file") is None
    assert config.get("logging.level") == "INFO"
    config.validate()


def test_set_creates_nested_keys():
    config = ConfigManager()

    config.set("storage.links_db_file", "links.db")
    config.set("extra.nested.value", 1)

    assert config.get("storage.links_db_file") == "links.db"
    assert config.get("extra.nested.value") == 1


def test_get_all_returns_a_copy():
    config = ConfigManager()

    config.get_all()["clipboard"]["poll_interval_milliseconds"] = 1

    assert config.get("clipboard.poll_interval_milliseconds") == 5000


def test_missing_file_raises(tmp_path: Path):
    with pytest.raises(ConfigError, match="not found"):
        ConfigManager(str(tmp_path / "nope.yaml"))


def test_invalid_yaml_raises(tmp_path: Path):
    path = write_config(tmp_path / "bad.yaml", "clipboard: [unclosed\n")

    with pytest.raises(ConfigError):
        ConfigManager(path)


def test_non_mapping_file_raises(tmp_path: Path):
    path = write_config(tmp_path / "list.yaml", "- a\n- b\n")

    with pytest.raises(ConfigError, match="mapping"):
        ConfigManager(path)


class TestValidate:

    @pytest.fixture
    def config(self) -> ConfigManager:
        config = ConfigManager()
        config.set("storage.links_db_file", "links.db")
        return config

    def test_valid_config_passes(self, config: ConfigManager):
        config.validate()

    @pytest.mark.parametrize("interval", [0, -5, "fast", True, None])
    def test_bad_interval_is_rejected(self, config: ConfigManager, interval):
        config.set("clipboard.poll_interval_milliseconds", interval)

        with pytest.raises(ConfigError, match="Poll interval"):
            config.validate()

    def test_no_storage_target_is_rejected(self):
        with pytest.raises(ConfigError, match="Exactly one"):
            ConfigManager().validate()

    def test_two_storage_targets_are_rejected(self, config: ConfigManager):
        config.set("storage.log_file", "links.txt")

        with pytest.raises(ConfigError, match="Exactly one"):
            config.validate()

    def test_unknown_log_level_is_rejected(self, config: ConfigManager):
        config.set("logging.level", "chatty")

        with pytest.raises(ConfigError, match="log level"):
            config.validate()
