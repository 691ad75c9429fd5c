from textual.theme import Theme

github_dark_theme = Theme(
    name="Github Dark",
    primary="#58A6FF",
    secondary="#8B949E",
    accent="#FF4500",
    foreground="#C9D1D9",
    background="#0D1117",
    surface="#161B22",
    panel="#21262D",
    success="#3FB950",
    warning="#D29922",
    error="#F85149",
    dark=True,
)

dracula_theme = Theme(
    name="Dracula",
    primary="#BD93F9",
    secondary="#6272A4",
    accent="#FF79C6",
    foreground="#F8F8F2",
    background="#282A36",
    surface="#2B2E3B",
    panel="#313442",
    success="#50FA7B",
    warning="#FFB86C",
    error="#FF5555",
    dark=True,
)

solarized_theme = Theme(
    name="Solarized",
    primary="#268BD2",
    secondary="#2AA198",
    accent="#CB4B16",
    foreground="#839496",
    background="#002B36",
    surface="#073642",
    panel="#0A4050",
    success="#859900",
    warning="#B58900",
    error="#DC322F",
    dark=True,
)

sepia_theme = Theme(
    name="Sepia",
    primary="#8B5E3C",
    secondary="#A0826D",
    accent="#C0582B",
    foreground="#433422",
    background="#F4ECD8",
    surface="#EDE0C8",
    panel="#E3D3B4",
    success="#5B7F3A",
    warning="#B8860B",
    error="#A4322B",
    dark=False,
)

THEMES = [github_dark_theme, dracula_theme, solarized_theme, sepia_theme]
