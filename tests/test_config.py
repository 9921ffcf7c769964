"""Tests for configuration loading and validation."""
import pytest
import yaml
from pydantic import ValidationError

from streamchat.config import (
    CONFIG_ENV_VAR,
    CompleteConfig,
    FrontendConfig,
    Palette,
    TerminalConfig,
    UsernameAlignment,
    default_config_path,
    dump_default_config,
    load_config,
)
from streamchat.errors import ConfigError, StreamChatError


class TestDefaults:
    """Tests for the built-in defaults."""

    def test_defaults(self):
        """Test default values of every section."""
        config = CompleteConfig()
        assert config.twitch.server == "irc.chat.twitch.tv"
        assert config.terminal.tick_delay == 30
        assert config.terminal.maximum_messages == 500
        assert config.frontend.date_format == "%H:%M:%S"
        assert config.frontend.username_alignment == UsernameAlignment.RIGHT
        assert config.frontend.palette == Palette.PASTEL
        assert config.frontend.margin == 0
        assert config.frontend.emotes_enabled

    @pytest.mark.parametrize(
        ("model", "field", "value"),
        [
            (TerminalConfig, "tick_delay", 0),
            (TerminalConfig, "maximum_messages", 0),
            (FrontendConfig, "maximum_username_length", 0),
            (FrontendConfig, "margin", -1),
        ],
    )
    def test_bounds(self, model, field, value):
        """Test that out-of-range numbers are rejected."""
        with pytest.raises(ValidationError):
            model(**{field: value})


class TestLoadConfig:
    """Tests for load_config."""

    def test_partial_file(self, tmp_path):
        """Test that missing keys keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "twitch:\n"
            "  channel: speedruns\n"
            "frontend:\n"
            "  palette: cool\n"
            "  username_alignment: center\n"
            "  margin: 2\n"
        )

        config = load_config(path)

        assert config.twitch.channel == "speedruns"
        assert config.frontend.palette == Palette.COOL
        assert config.frontend.username_alignment == UsernameAlignment.CENTER
        assert config.frontend.margin == 2
        assert config.terminal.maximum_messages == 500

    def test_empty_file(self, tmp_path):
        """Test that an empty file means all defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == CompleteConfig()

    def test_missing_explicit_path(self, tmp_path):
        """Test that a named file must exist."""
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_missing_default_path(self, tmp_path, monkeypatch):
        """Test that a missing default file falls back to defaults."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "absent.yaml"))
        assert load_config() == CompleteConfig()

    def test_env_var_path(self, tmp_path, monkeypatch):
        """Test that the environment variable selects the default file."""
        path = tmp_path / "custom.yaml"
        path.write_text("terminal:\n  tick_delay: 50\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert default_config_path() == path
        assert load_config().terminal.tick_delay == 50

    def test_home_fallback(self, monkeypatch):
        """Test the default location without the environment variable."""
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert default_config_path().parts[-3:] == (".config", "streamchat", "config.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "frontend:\n  palette: neon\n",
            "terminal:\n  maximum_messages: 0\n",
            "- just\n- a list\n",
            "frontend: [unclosed\n",
        ],
    )
    def test_invalid_files(self, tmp_path, content):
        """Test that bad files raise ConfigError."""
        path = tmp_path / "config.yaml"
        path.write_text(content)

        with pytest.raises(ConfigError) as excinfo:
            load_config(path)
        assert isinstance(excinfo.value, StreamChatError)


class TestDumpDefaultConfig:
    """Tests for the default config template."""

    def test_template_loads_back(self, tmp_path):
        """Test that the printed template is a valid config."""
        text = dump_default_config()
        path = tmp_path / "config.yaml"
        path.write_text(text)

        assert load_config(path) == CompleteConfig()

    def test_template_uses_plain_values(self):
        """Test that enums are written as strings."""
        data = yaml.safe_load(dump_default_config())
        assert data["frontend"]["palette"] == "pastel"
        assert data["frontend"]["username_alignment"] == "right"
