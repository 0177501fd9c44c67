"""Tests for config loading and validation."""

from pathlib import Path

import pytest
import yaml

from cli.config import DEFAULT_CONFIG, find_config, get_paths, load_config, load_config_model
from cli.config_models import ApiConfig, LoggingConfig, SupportConfig


def _write(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
    return path


class TestLoadConfig:
    def test_defaults_without_file(self, isolated_home):
        config = load_config_model()
        assert config.api.endpoint == "http://127.0.0.1:8000"
        assert config.server.allowed_origin == "*"
        assert config.feedback.max_comment_length == 500
        assert config.feedback.vote_retention_days == 365
        assert config.tracking.history_limit == 20
        assert config.storage.db_path == isolated_home / "feedback.db"

    def test_cwd_config_preferred(self, tmp_path, isolated_home):
        _write(isolated_home / "config.yaml", {"server": {"port": 9001}})
        _write(tmp_path / "config.yaml", {"server": {"port": 9002}})
        assert find_config() == tmp_path / "config.yaml"
        assert load_config_model().server.port == 9002

    def test_home_config_used(self, isolated_home):
        _write(isolated_home / "config.yaml", {"feedback": {"max_comment_length": 280}})
        assert load_config_model().feedback.max_comment_length == 280

    def test_explicit_path(self, tmp_path):
        path = _write(tmp_path / "custom.yaml", {"storage": {"db_path": "~/fb.db"}})
        config = load_config_model(path)
        assert config.storage.db_path == Path("~/fb.db").expanduser()

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path / "bad.yaml", "server: [unclosed")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_model(path)

    def test_non_mapping(self, tmp_path):
        path = _write(tmp_path / "list.yaml", "- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config_model(path)

    def test_validation_failure(self, tmp_path):
        path = _write(tmp_path / "bad.yaml", {"server": {"port": 0}})
        with pytest.raises(ValueError, match="Config validation failed"):
            load_config_model(path)

    def test_load_config_dict(self):
        assert load_config()["feedback"]["max_vote_attempts"] == 3
        assert DEFAULT_CONFIG["logging"]["level"] == "INFO"

    def test_get_paths(self, isolated_home):
        paths = get_paths(SupportConfig())
        assert paths["local_state"] == isolated_home / "local_state.json"


class TestModels:
    def test_endpoint_trailing_slash_stripped(self):
        assert ApiConfig(endpoint="https://api.example.org/").endpoint == "https://api.example.org"

    def test_endpoint_must_be_http(self):
        with pytest.raises(ValueError):
            ApiConfig(endpoint="ftp://example.org")

    def test_endpoint_env_expansion(self, monkeypatch):
        monkeypatch.setenv("SUPPORT_API", "https://feedback.example.org/")
        assert ApiConfig(endpoint="${SUPPORT_API}").endpoint == "https://feedback.example.org"

    def test_log_level_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")
