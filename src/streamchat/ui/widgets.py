"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat panel geometry and repainting
- Log rendering, level filtering and scrolling
- Bridging the logging module into the log panel
"""

import logging
from datetime import datetime

from rich.markup import escape
from rich.text import Text
from textual.widget import Widget
from textual.widgets import RichLog

from ..chat import ChatController, Frame
from .formatting import render_frame


class ChatPanel(Widget):
    """Bottom-anchored chat rows with emote overlays.

    The panel never scrolls itself; the controller's scroll offset decides
    which rows are shown, and the panel only reports its content size.
    """

    BORDER_TITLE = "Chat"
    can_focus = True

    def __init__(self, controller: ChatController, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._controller = controller
        self._frame: Frame | None = None

    @property
    def frame(self) -> Frame | None:
        """Most recently computed frame."""
        return self._frame

    def redraw(self) -> Frame:
        """Recompute the frame for the current content size and repaint."""
        size = self.content_size
        frame = self._controller.redraw(size.height, size.width)
        self._frame = frame

        self.border_title = frame.title or self.BORDER_TITLE
        subtitle = f"{len(self._controller.store)} messages"
        if frame.scroll_offset:
            subtitle += f" | {frame.scroll_offset} rows up"
        if not self._controller.overlays.enabled:
            subtitle += " | emotes off"
        self.border_subtitle = subtitle

        self.refresh()
        return frame

    def render(self) -> Text:
        if self._frame is None:
            return Text("")
        return render_frame(self._frame)


class DebugPanel(RichLog):
    """Log panel for records from the logging module, with level filtering.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Hidden"

    LEVEL_COLORS = {
        logging.DEBUG: "dim white",
        logging.INFO: "cyan",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "bold red",
    }

    def __init__(self, *args, log_level: int = logging.WARNING, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {logging.getLevelName(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_record(self, record: logging.LogRecord) -> None:
        """Write a log record if it meets the current level threshold."""
        if record.levelno < self._log_level:
            return

        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level_color = self.LEVEL_COLORS.get(record.levelno, "white")
        component = record.name.rsplit(".", 1)[-1]

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{record.levelname:<7}[/] "
            f"[magenta]\\[{escape(component)}][/] {escape(record.getMessage())}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class LogPanelHandler(logging.Handler):
    """Forwards log records to a DebugPanel."""

    def __init__(self, panel: DebugPanel, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.panel.add_record(record)
        except Exception:
            self.handleError(record)
