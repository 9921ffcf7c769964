"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palette of the chat panel and log panel
- Scrollbar and border colors

To add a new theme, define it here and register it in the app.
"""

from textual.theme import Theme

# Catppuccin Mocha, tuned for long-running chat: muted borders, dim chrome
STREAMCHAT_MOCHA = Theme(
    name="streamchat-mocha",
    primary="#cba6f7",      # Mauve - chat panel accent
    secondary="#89b4fa",    # Blue - log panel accent
    accent="#f9e2af",       # Yellow - emote overlays
    foreground="#cdd6f4",   # Message text
    background="#11111b",   # Crust
    success="#a6e3a1",
    warning="#fab387",      # Peach - warnings in the log panel
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-background": "#181825",
        "footer-key-foreground": "#f9e2af",
        "footer-background": "#11111b",
        "text-muted": "#6c7086",
    },
)
