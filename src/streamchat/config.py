"""Configuration models and loading.

Hides the configuration file format (YAML) and its validation rules.
Every section has defaults, so an empty or missing file is valid.
"""

import os
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

CONFIG_ENV_VAR = "STREAMCHAT_CONFIG"


class Palette(str, Enum):
    """Color curve used when hashing usernames."""

    PASTEL = "pastel"
    VIBRANT = "vibrant"
    WARM = "warm"
    COOL = "cool"


class UsernameAlignment(str, Enum):
    """Placement of the username within its fixed-width column."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TwitchConfig(BaseModel):
    """Connecting to the streaming platform."""

    username: str = Field(default="", description="The viewer's own username")
    channel: str = Field(default="", description="Channel whose chat is shown")
    server: str = Field(default="irc.chat.twitch.tv", description="Chat server host")


class TerminalConfig(BaseModel):
    """Internal functionality."""

    tick_delay: int = Field(default=30, ge=1, description="Delay between redraws, in milliseconds")
    maximum_messages: int = Field(default=500, ge=1, description="Messages kept in memory")


class FrontendConfig(BaseModel):
    """How everything looks to the user."""

    date_shown: bool = True
    date_format: str = Field(default="%H:%M:%S", description="strftime format for timestamps")
    maximum_username_length: int = Field(default=26, ge=1)
    username_alignment: UsernameAlignment = UsernameAlignment.RIGHT
    palette: Palette = Palette.PASTEL
    title_shown: bool = True
    margin: int = Field(default=0, ge=0, description="Horizontal padding around emote overlays")
    emotes_enabled: bool = True


class CompleteConfig(BaseModel):
    """All configuration sections."""

    twitch: TwitchConfig = Field(default_factory=TwitchConfig)
    terminal: TerminalConfig = Field(default_factory=TerminalConfig)
    frontend: FrontendConfig = Field(default_factory=FrontendConfig)


def default_config_path() -> Path:
    """Config path from $STREAMCHAT_CONFIG, else ~/.config/streamchat/config.yaml."""
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "streamchat" / "config.yaml"


def load_config(path: str | Path | None = None) -> CompleteConfig:
    """Load and validate a configuration file.

    Args:
        path: YAML file to read. If None, the default path is used and a
            missing file yields the defaults.

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read or fails validation
    """
    explicit = path is not None
    config_path = Path(path) if explicit else default_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        return CompleteConfig()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if raw is None:
        return CompleteConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: expected a mapping at the top level")

    try:
        return CompleteConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}:\n{e}") from e


def dump_default_config() -> str:
    """Default configuration rendered as YAML."""
    return yaml.safe_dump(CompleteConfig().model_dump(mode="json"), sort_keys=False)
