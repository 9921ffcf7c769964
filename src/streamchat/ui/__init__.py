"""Terminal UI module for streamchat.

Provides a Textual-based TUI around the chat core.

Module structure (Parnas principle - each module hides a design decision):
- widgets.py: Chat panel, log panel, logging bridge
- formatting.py: Frame to Rich text, emote highlighting
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (timer, feed, key bindings)
"""

from .app import StreamChatApp, run_tui
from .formatting import render_frame
from .widgets import ChatPanel, DebugPanel, LogPanelHandler

__all__ = [
    "ChatPanel",
    "DebugPanel",
    "LogPanelHandler",
    "StreamChatApp",
    "render_frame",
    "run_tui",
]
