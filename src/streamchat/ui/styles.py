"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
The chat panel fills the screen; the log panel docks below it when shown.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* Chat rows are laid out by the controller, so the panel never scrolls */
#chat-panel {
    height: 1fr;
    width: 1fr;
    background: $surface;
    border: tall $border-blurred;
    border-title-color: $primary;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    overflow: hidden hidden;
    padding: 0;

    &:focus {
        border: tall $border;
    }
}

/* Log panel, hidden until ctrl+d or --log-level */
#debug-panel {
    dock: bottom;
    height: 10;
    background: $panel;
    border-top: solid $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    padding: 0 1;
}

Header {
    background: $background;
    color: $primary;
}
"""
