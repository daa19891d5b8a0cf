"""Tests for configuration system."""

import json

import pytest

from beepctl.core.config import (
    DEFAULT_BASE_URL,
    BeeperConfig,
    load_config,
    migrate_legacy_config,
    save_config,
)
from beepctl.core.exceptions import ConfigError


class TestBeeperConfig:
    """Tests for BeeperConfig class."""

    def test_empty_config(self):
        config = BeeperConfig()
        assert config.token is None
        assert config.aliases == {}
        assert config.resolved_base_url == DEFAULT_BASE_URL

    def test_env_overrides_file(self):
        config = BeeperConfig(token="file", base_url="http://file", env_token="env", env_url="http://env")
        assert config.resolved_token == "env"
        assert config.resolved_base_url == "http://env"

    def test_to_dict_uses_file_layout(self):
        config = BeeperConfig(token="t", base_url="http://x", aliases={"a": "!a"})
        assert config.to_dict() == {"token": "t", "baseUrl": "http://x", "aliases": {"a": "!a"}}

    def test_to_dict_skips_env_values(self):
        config = BeeperConfig(env_token="secret", env_url="http://env")
        assert config.to_dict() == {}

    def test_from_dict_rejects_bad_aliases(self):
        with pytest.raises(ConfigError):
            BeeperConfig.from_dict({"aliases": ["work"]})


class TestLoadConfig:
    """Tests for config loading."""

    def test_load_config_from_file(self, sample_config):
        config = load_config(sample_config, environ={})

        assert config.token == "tok_1234567890abcdef"
        assert config.base_url == "http://localhost:23373"
        assert config.aliases["work"] == "!work:beeper.local"

    def test_missing_file_is_empty(self, temp_dir):
        config = load_config(temp_dir / "missing.json", environ={})
        assert config.token is None
        assert config.base_url is None
        assert config.aliases == {}

    def test_env_keeps_aliases(self, sample_config):
        config = load_config(sample_config, environ={"BEEPER_TOKEN": "env-token"})

        assert config.resolved_token == "env-token"
        assert config.token == "tok_1234567890abcdef"
        assert "work" in config.aliases

    def test_env_url(self, temp_dir):
        config = load_config(temp_dir / "none.json", environ={"BEEPER_URL": "http://remote:1"})
        assert config.resolved_base_url == "http://remote:1"

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path, environ={})

    def test_non_object(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config(path, environ={})


class TestSaveConfig:
    """Tests for config saving."""

    def test_save_creates_parent_dirs(self, temp_dir):
        path = temp_dir / "nested" / "dir" / "config.json"
        save_config(BeeperConfig(token="abc"), path)

        assert json.loads(path.read_text()) == {"token": "abc"}

    def test_save_back_to_source(self, sample_config):
        config = load_config(sample_config, environ={"BEEPER_TOKEN": "from-env"})
        config.aliases["home"] = "!home:beeper.local"
        save_config(config)

        data = json.loads(sample_config.read_text())
        assert data["aliases"]["home"] == "!home:beeper.local"
        # Environment token never lands on disk
        assert data["token"] == "tok_1234567890abcdef"


class TestMigration:
    """Tests for legacy config migration."""

    def test_migrates_legacy_file(self, temp_dir):
        legacy = temp_dir / "beepcli" / "config.json"
        legacy.parent.mkdir()
        legacy.write_text(json.dumps({"token": "old"}))
        target = temp_dir / "beepctl" / "config.json"

        assert migrate_legacy_config(target, legacy) is True
        assert json.loads(target.read_text()) == {"token": "old"}
        assert not legacy.parent.exists()

    def test_skips_when_new_config_exists(self, temp_dir):
        legacy = temp_dir / "beepcli" / "config.json"
        legacy.parent.mkdir()
        legacy.write_text(json.dumps({"token": "old"}))
        target = temp_dir / "beepctl" / "config.json"
        target.parent.mkdir()
        target.write_text(json.dumps({"token": "new"}))

        assert migrate_legacy_config(target, legacy) is False
        assert json.loads(target.read_text()) == {"token": "new"}
        assert legacy.exists()

    def test_skips_without_legacy(self, temp_dir):
        target = temp_dir / "beepctl" / "config.json"
        assert migrate_legacy_config(target, temp_dir / "nope.json") is False
        assert not target.exists()

    def test_broken_legacy_file_is_left_alone(self, temp_dir):
        legacy = temp_dir / "beepcli" / "config.json"
        legacy.parent.mkdir()
        legacy.write_text("{broken")
        target = temp_dir / "beepctl" / "config.json"

        assert migrate_legacy_config(target, legacy) is False
        assert legacy.exists()
