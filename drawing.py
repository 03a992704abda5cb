"""
Pen state and the drawing surface contract.

The interpreter never draws pixels itself. It hands primitives to a
DrawingSurface: the desktop host adapts a Tk canvas, tests and the
command line use RecordingSurface.
"""
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

DEFAULT_COLOR = "BLACK"
DEFAULT_TEXT_SIZE = 12

# Pen palette: colour name -> hex
PALETTE = {
    "BLACK": "#000000",
    "BLUE": "#0000ff",
    "RED": "#ff0000",
    "GREEN": "#008000",
}

Point = Tuple[int, int]


@dataclass
class PenState:
    x: int = 0
    y: int = 0
    color: str = DEFAULT_COLOR
    fill: bool = False

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def color_name(self) -> str:
        return self.color.capitalize()

    def move(self, x: int, y: int):
        self.x, self.y = x, y

    def reset(self):
        self.x, self.y = 0, 0
        self.color = DEFAULT_COLOR
        self.fill = False


class DrawingSurface:
    """Primitive operations a renderer must provide. Colours are palette names."""

    def move_to(self, x: int, y: int):
        raise NotImplementedError

    def line_to(self, x1: int, y1: int, x2: int, y2: int, color: str):
        raise NotImplementedError

    def fill_or_stroke_ellipse(self, x: int, y: int, width: int, height: int,
                               color: str, filled: bool):
        raise NotImplementedError

    def fill_or_stroke_rectangle(self, x: int, y: int, width: int, height: int,
                                 color: str, filled: bool):
        raise NotImplementedError

    def fill_or_stroke_polygon(self, points: Sequence[Point], color: str, filled: bool):
        raise NotImplementedError

    def draw_text(self, text: str, x: int, y: int, size: int, color: str):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError


@dataclass
class Primitive:
    name: str
    args: Tuple[Any, ...]


@dataclass
class RecordingSurface(DrawingSurface):
    """Keeps every primitive in call order instead of rendering it."""
    operations: List[Primitive] = field(default_factory=list)

    def _record(self, name, *args):
        self.operations.append(Primitive(name, args))

    def move_to(self, x, y):
        self._record("move_to", x, y)

    def line_to(self, x1, y1, x2, y2, color):
        self._record("line_to", x1, y1, x2, y2, color)

    def fill_or_stroke_ellipse(self, x, y, width, height, color, filled):
        self._record("ellipse", x, y, width, height, color, filled)

    def fill_or_stroke_rectangle(self, x, y, width, height, color, filled):
        self._record("rectangle", x, y, width, height, color, filled)

    def fill_or_stroke_polygon(self, points, color, filled):
        self._record("polygon", tuple(points), color, filled)

    def draw_text(self, text, x, y, size, color):
        self._record("text", text, x, y, size, color)

    def clear(self):
        self._record("clear")

    def names(self) -> List[str]:
        return [op.name for op in self.operations]

    def of(self, name: str) -> List[Primitive]:
        return [op for op in self.operations if op.name == name]
