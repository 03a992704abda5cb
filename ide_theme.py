"""
IDE Theme: shared color palette, canvas settings and keyword lists.
Extracted from ide.py so the palette and keyword sets live apart from
the window code.
"""

# ── Theme Colors  (Catppuccin Mocha) ──
COLORS = {
    "bg":           "#1e1e2e",
    "bg_secondary": "#181825",
    "bg_tertiary":  "#11111b",
    "surface":      "#313244",
    "overlay":      "#45475a",
    "text":         "#cdd6f4",
    "subtext":      "#a6adc8",
    "blue":         "#89b4fa",
    "green":        "#a6e3a1",
    "red":          "#f38ba8",
    "yellow":       "#f9e2af",
    "mauve":        "#cba6f7",
    "peach":        "#fab387",
    "sky":          "#89dceb",
    "line_num_fg":  "#585b70",
    "selection":    "#45475a",
    "cursor":       "#f5e0dc",
    "gutter":       "#282a3a",
    "output_bg":    "#11111b",
    "toolbar_bg":   "#181825",
    "status_bg":    "#181825",
    "accent":       "#89b4fa",
    "error":        "#f38ba8",
    "success":      "#a6e3a1",
    "warning":      "#f9e2af",
    "button_bg":    "#313244",
    "button_hover": "#45475a",
    "border":       "#313244",
    "current_line": "#232336",
}

# ── Drawing canvas ──
CANVAS_WIDTH = 640
CANVAS_HEIGHT = 480
CANVAS_BG = "#ffffff"
PEN_MARKER_RADIUS = 3
TEXT_FONT_FAMILY = "Arial"

# ── Keyword Lists for Highlighting ──
KEYWORDS_CONTROL = {
    'IF', 'ENDIF', 'WHILE', 'ENDWHILE', 'METHOD', 'ENDMETHOD',
}
KEYWORDS_DRAW = {
    'MOVE', 'DRAW', 'CIRCLE', 'RECTANGLE', 'TRIANGLE', 'WRITE', 'CLEAR', 'RESET',
}
KEYWORDS_PEN = {'COLOR', 'FILL', 'ON', 'OFF'}
PALETTE_WORDS = {'BLACK', 'BLUE', 'RED', 'GREEN'}
