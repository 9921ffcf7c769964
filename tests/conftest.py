"""Pytest configuration and shared fixtures."""
import pytest

from streamchat.chat import EmoteOverlayManager, MessageStore
from streamchat.config import CompleteConfig, FrontendConfig, UsernameAlignment


@pytest.fixture
def frontend():
    """Frontend config with a 6-column chrome: 4-cell username + ': '."""
    return FrontendConfig(
        date_shown=False,
        maximum_username_length=4,
        username_alignment=UsernameAlignment.LEFT,
        margin=0,
    )


@pytest.fixture
def config(frontend):
    """Complete config around the compact frontend."""
    return CompleteConfig(frontend=frontend)


@pytest.fixture
def overlays():
    return EmoteOverlayManager()


@pytest.fixture
def store():
    return MessageStore()
