"""Tests for configuration loading."""

import pytest

from coding_agent.errors import ConfigError
from coding_agent.utils.config import AppConfig, config_path, load_config


class TestLoadConfig:
    """Tests for the TOML config file."""

    def test_default_config(self):
        """Test built-in defaults."""
        config = AppConfig()
        assert config.model.default == "claude-sonnet-4-5"
        assert config.model.max_tokens == 1024
        assert config.agent.max_iterations == 10
        assert config.agent.report_unknown_tools is False

    def test_missing_file_uses_defaults(self, tmp_path):
        """Test that a missing file is not an error."""
        assert load_config(tmp_path / "config.toml") == AppConfig()

    def test_partial_config_parsing(self, tmp_path):
        """Test that missing fields fall back to their defaults."""
        path = tmp_path / "config.toml"
        path.write_text('[model]\ndefault = "claude-haiku-4-5"\n')

        config = load_config(path)

        assert config.model.default == "claude-haiku-4-5"
        assert config.model.max_tokens == 1024
        assert config.agent.max_iterations == 10

    def test_full_config(self, tmp_path):
        """Test every supported setting."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[model]\ndefault = "claude-opus-4-1"\nmax_tokens = 4096\n\n'
            "[agent]\nmax_iterations = 3\nreport_unknown_tools = true\n"
        )

        config = load_config(path)

        assert config.model.max_tokens == 4096
        assert config.agent.max_iterations == 3
        assert config.agent.report_unknown_tools is True

    def test_invalid_toml(self, tmp_path):
        """Test that unparsable TOML is a configuration error."""
        path = tmp_path / "config.toml"
        path.write_text("[model\n")

        with pytest.raises(ConfigError, match="Failed to read config file"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        """Test that out-of-range values are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("[agent]\nmax_iterations = 0\n")

        with pytest.raises(ConfigError, match="Invalid config file"):
            load_config(path)

    def test_config_home_override(self, tmp_path, monkeypatch):
        """Test that CODING_AGENT_HOME moves the default config location."""
        monkeypatch.setenv("CODING_AGENT_HOME", str(tmp_path))
        (tmp_path / "config.toml").write_text("[agent]\nmax_iterations = 7\n")

        assert config_path() == tmp_path / "config.toml"
        assert load_config().agent.max_iterations == 7
