"""
Streamchat: a terminal viewer for live stream chat with inline emote overlays.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .config import CompleteConfig, load_config
from .errors import ConfigError, NonTextPayloadError, StreamChatError

__all__ = [
    "CompleteConfig",
    "ConfigError",
    "NonTextPayloadError",
    "StreamChatError",
    "load_config",
]
