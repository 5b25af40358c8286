"""
Tests for CallerConfig loading from YAML and environment overrides.
"""

import pytest

from http_caller import CallerConfig, load_config
from http_caller import config as config_module


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_var in config_module.ENV_MAPPINGS:
        monkeypatch.delenv(env_var, raising=False)
    # keep a stray .env in the working directory out of the tests
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)


class TestCallerConfig:

    def test_defaults(self):
        config = CallerConfig()
        assert config.connect_timeout == 10.0
        assert config.verify_tls is True
        assert config.follow_redirects is True
        assert config.timeout == (10.0, None)


class TestLoadConfig:

    def test_shipped_defaults(self):
        config = load_config()
        assert config.connect_timeout == 10.0
        assert config.verify_tls is True
        assert config.follow_redirects is True
        assert config.log_level == "INFO"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "caller:\n"
            "  connect_timeout: 3.5\n"
            "  verify_tls: false\n"
            "logging:\n"
            "  level: debug\n"
        )

        config = load_config(path)

        assert config.connect_timeout == 3.5
        assert config.verify_tls is False
        assert config.follow_redirects is True
        assert config.log_level == "DEBUG"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("caller:\n  connect_timeout: 3\n")
        monkeypatch.setenv("CALLER_CONNECT_TIMEOUT", "7")
        monkeypatch.setenv("CALLER_FOLLOW_REDIRECTS", "false")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        config = load_config(path)

        assert config.connect_timeout == 7.0
        assert config.follow_redirects is False
        assert config.log_level == "WARNING"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        config = load_config(path)

        assert config.connect_timeout == 10.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("caller: [unclosed\n")

        with pytest.raises(ValueError):
            load_config(path)
