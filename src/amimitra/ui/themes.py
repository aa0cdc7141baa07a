"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Catppuccin Mocha palette
MITRA_MOCHA = Theme(
    name="mitra-mocha",
    primary="#89b4fa",      # Blue - user bubbles, focus
    secondary="#cba6f7",    # Mauve - bot bubbles, typing row
    accent="#f9e2af",       # Yellow - bullets, footer keys
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",
    warning="#fab387",      # Peach - log panel
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "border": "#45475a",
        "border-blurred": "#313244",
        "text-muted": "#6c7086",
        "input-cursor-background": "#cdd6f4",
        "input-cursor-foreground": "#11111b",
        "input-selection-background": "#89b4fa 30%",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",
        "footer-description-foreground": "#a6adc8",
    },
)
