"""Dark theme for the notechat panel.

Colors, fonts and spacing shared by the widgets and the HTML renderer.
The palette follows the note app's default dark theme: neutral greys
with one purple interactive accent.
"""

from dataclasses import dataclass


@dataclass
class ThemeColors:
    """Color scheme."""

    # Surfaces, darkest first
    background: str = "#1e1e1e"
    background_secondary: str = "#262626"  # Message list
    background_elevated: str = "#303030"  # Popup, inputs, context bar
    background_modifier_hover: str = "#3a3a3a"

    text_primary: str = "#dcddde"
    text_secondary: str = "#b3b3b3"
    text_muted: str = "#999999"
    text_faint: str = "#666666"
    text_on_accent: str = "#ffffff"

    interactive_accent: str = "#7f6df2"
    interactive_accent_hover: str = "#8875ff"
    accent_subtle: str = "rgba(127, 109, 242, 0.2)"

    border: str = "#404040"
    border_subtle: str = "#333333"

    user_bubble: str = "#7f6df2"
    assistant_bubble: str = "#2b2b2b"

    code_bg: str = "#1a1a1a"
    code_border: str = "#3f3f3f"

    selection: str = "rgba(127, 109, 242, 0.35)"


@dataclass
class ThemeFonts:
    """Font families."""

    ui: str = "'Inter', -apple-system, 'Segoe UI', sans-serif"
    chat: str = "'Inter', 'Segoe UI', sans-serif"
    mono: str = "'JetBrains Mono', 'Menlo', 'Consolas', monospace"


@dataclass
class ThemeMetrics:
    """Sizes in pixels."""

    radius_small: int = 4
    radius_medium: int = 6
    radius_large: int = 8

    padding_small: int = 6
    padding_medium: int = 10
    padding_large: int = 14

    font_small: int = 11
    font_normal: int = 13
    font_medium: int = 14
    font_large: int = 16


theme = ThemeColors()
fonts = ThemeFonts()
metrics = ThemeMetrics()


def _base_rules() -> str:
    return f"""
        QMainWindow, QDialog {{
            background-color: {theme.background};
        }}
        QWidget {{
            color: {theme.text_primary};
            font-family: {fonts.ui};
            font-size: {metrics.font_normal}px;
        }}
        QLabel {{
            background: transparent;
        }}
        QToolTip {{
            background-color: {theme.background_elevated};
            border: 1px solid {theme.border};
            padding: 4px;
        }}
        QScrollBar:vertical {{
            background: transparent;
            width: 6px;
        }}
        QScrollBar::handle:vertical {{
            background-color: {theme.border};
            border-radius: 3px;
            min-height: 24px;
        }}
        QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
            height: 0;
        }}
    """


def _input_rules() -> str:
    return f"""
        QLineEdit {{
            background-color: {theme.background_elevated};
            border: 1px solid {theme.border};
            border-radius: {metrics.radius_medium}px;
            padding: {metrics.padding_small}px {metrics.padding_medium}px;
            font-family: {fonts.chat};
            font-size: {metrics.font_medium}px;
            selection-background-color: {theme.selection};
        }}
        QLineEdit:focus {{
            border-color: {theme.interactive_accent};
        }}
        QComboBox {{
            background-color: {theme.background_elevated};
            border: 1px solid {theme.border};
            border-radius: {metrics.radius_small}px;
            padding: 3px {metrics.padding_small}px;
        }}
        QComboBox QAbstractItemView {{
            background-color: {theme.background_elevated};
            selection-background-color: {theme.interactive_accent};
        }}
    """


def _button_rules() -> str:
    return f"""
        QPushButton {{
            background-color: {theme.interactive_accent};
            color: {theme.text_on_accent};
            border: none;
            border-radius: {metrics.radius_small}px;
            padding: {metrics.padding_small}px {metrics.padding_large}px;
        }}
        QPushButton:hover {{
            background-color: {theme.interactive_accent_hover};
        }}
        QPushButton:disabled {{
            background-color: {theme.border};
            color: {theme.text_faint};
        }}
    """


def _suggestion_rules() -> str:
    return f"""
        QListWidget {{
            background-color: {theme.background_elevated};
            border: none;
            outline: none;
        }}
        QListWidget::item {{
            padding: {metrics.padding_small}px {metrics.padding_medium}px;
        }}
        QListWidget::item:hover {{
            background-color: {theme.background_modifier_hover};
        }}
        QListWidget::item:selected {{
            background-color: {theme.accent_subtle};
            color: {theme.text_primary};
        }}
        QTextBrowser {{
            background: transparent;
            border: none;
        }}
    """


def get_stylesheet() -> str:
    """Generate the application stylesheet.

    Returns:
        Qt stylesheet string
    """
    return "".join((_base_rules(), _input_rules(), _button_rules(), _suggestion_rules()))
