"""Main Textual TUI application.

Orchestrates the chat panel, the message feed and the redraw timer.
Everything that touches the chat state runs on the app's event loop.
"""

import logging
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Footer, Header

from ..chat import ChatController, DataBuilder, MessageFeed, run_demo_producer
from ..chat.feed import DEMO_EMOTES
from ..config import CompleteConfig, load_config
from ..errors import ConfigError
from ..logging_config import level_from_string
from .styles import APP_CSS
from .themes import STREAMCHAT_MOCHA
from .widgets import ChatPanel, DebugPanel, LogPanelHandler

logger = logging.getLogger(__name__)


class StreamChatApp(App):
    """Textual TUI showing a live chat channel."""

    CSS = APP_CSS
    TITLE = "Streamchat"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False),
        Binding("up", "scroll_up", "Up"),
        Binding("down", "scroll_down", "Down"),
        Binding("end", "scroll_bottom", "Latest"),
        Binding("ctrl+e", "toggle_emotes", "Emotes"),
        Binding("ctrl+r", "reload_config", "Reload"),
        Binding("ctrl+d", "toggle_debug", "Log"),
    ]

    def __init__(
        self,
        config: CompleteConfig,
        config_path: str | Path | None = None,
        demo: bool = True,
        log_level: str | None = None,
        feed: MessageFeed | None = None,
    ) -> None:
        super().__init__()
        self.config = config
        self._config_path = config_path
        self._demo = demo
        self._log_level = log_level
        self.feed = feed or MessageFeed()
        self.controller = ChatController(config)
        self._ticker: Timer | None = None
        self._drawing = False
        self._log_handler: LogPanelHandler | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield ChatPanel(self.controller, id="chat-panel")
        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(STREAMCHAT_MOCHA)
        self.theme = "streamchat-mocha"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._log_handler = LogPanelHandler(log_panel)
        logging.getLogger("streamchat").addHandler(self._log_handler)
        if self._log_level is not None:
            log_panel.log_level = level_from_string(self._log_level)
            log_panel.show()

        channel = self.config.twitch.channel or "demo"
        self.sub_title = f"#{channel}"

        self._start_ticker()
        self.consume_feed()
        if self._demo:
            self.run_demo()

        self.query_one("#chat-panel", ChatPanel).focus()

    def on_unmount(self) -> None:
        """Detach the log handler and stop the feed."""
        if self._log_handler is not None:
            logging.getLogger("streamchat").removeHandler(self._log_handler)
            self._log_handler = None
        self.feed.close()

    def _start_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
        interval = self.config.terminal.tick_delay / 1000
        self._ticker = self.set_interval(interval, self.tick)

    def tick(self) -> None:
        """Redraw the chat panel. Ticks arriving mid-redraw are dropped."""
        if self._drawing:
            return
        self._drawing = True
        try:
            self.query_one("#chat-panel", ChatPanel).redraw()
        finally:
            self._drawing = False

    @work(exclusive=True, group="feed")
    async def consume_feed(self) -> None:
        """Move messages from the feed into the controller."""
        while True:
            message = await self.feed.get()
            self.controller.ingest(message)

    @work(exclusive=True, group="demo")
    async def run_demo(self) -> None:
        """Produce demo chatter."""
        builder = DataBuilder(self.config.frontend.date_format, DEMO_EMOTES)
        await run_demo_producer(self.feed, builder)

    def action_scroll_up(self) -> None:
        self.controller.scroll_up()
        self.tick()

    def action_scroll_down(self) -> None:
        self.controller.scroll_down()
        self.tick()

    def action_scroll_bottom(self) -> None:
        self.controller.scroll_to_bottom()
        self.tick()

    def action_toggle_emotes(self) -> None:
        """Switch emote overlays on or off."""
        enabled = self.controller.toggle_overlays()
        self.notify(f"Emotes {'on' if enabled else 'off'}", timeout=2)
        self.tick()

    def action_reload_config(self) -> None:
        """Reload the configuration file and apply it."""
        try:
            config = load_config(self._config_path)
        except ConfigError as e:
            logger.error("Config reload failed: %s", e)
            self.notify("Config reload failed", severity="error", timeout=4)
            return

        tick_changed = config.terminal.tick_delay != self.config.terminal.tick_delay
        self.config = config
        self.controller.apply_config(config)
        if tick_changed:
            self._start_ticker()
        logger.info("Configuration reloaded")
        self.notify("Config reloaded", timeout=2)
        self.tick()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


def run_tui(
    config: CompleteConfig,
    config_path: str | Path | None = None,
    demo: bool = True,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI until the user quits.

    Args:
        config: Validated configuration
        config_path: File to re-read on Ctrl+R
        demo: Feed the panel with generated chatter
        log_level: Show the log panel at this level (debug/info/warning/error)
    """
    app = StreamChatApp(
        config=config,
        config_path=config_path,
        demo=demo,
        log_level=log_level,
    )
    app.run()
