"""
Styles and themes for the LayerZoom debug app.

Dark theme with a colour per presentation mode.
"""

# Dark theme colors
COLORS = {
    "bg_primary": "#1e1e1e",
    "bg_secondary": "#252526",
    "bg_tertiary": "#2d2d30",
    "text_primary": "#d4d4d4",
    "text_secondary": "#888888",
    "accent": "#4fc3f7",
    "border": "#3e3e42",
    "zoom_marker": "#ffff00",
    "optimal_tick": "#0088ff",
    "primary_tick": "#ff00ff",
}

# One colour per PresentationMode value
MODE_COLORS = {
    "invisible": "#2d2d30",
    "fading_in": "#1b5e20",
    "expanded": "#43a047",
    "collapsing": "#f9a825",
    "collapsed": "#ef6c00",
    "fading_out": "#6d4c41",
}

DARK_STYLESHEET = """
QMainWindow, QWidget {
    background-color: #1e1e1e;
    color: #d4d4d4;
    font-family: "Segoe UI", sans-serif;
}

QPushButton {
    background-color: #2d2d30;
    border: 1px solid #3e3e42;
    border-radius: 4px;
    padding: 6px 14px;
}
QPushButton:hover {
    background-color: #3e3e42;
    border-color: #4fc3f7;
}

QPlainTextEdit {
    background-color: #252526;
    border: 1px solid #3e3e42;
    border-radius: 3px;
    font-family: Consolas, "Courier New", monospace;
}

QSlider::groove:horizontal {
    background-color: #2d2d30;
    height: 6px;
    border-radius: 3px;
}
QSlider::handle:horizontal {
    background-color: #4fc3f7;
    width: 12px;
    margin: -4px 0;
    border-radius: 6px;
}

QStatusBar {
    background-color: #007acc;
    color: white;
}
"""
