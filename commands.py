"""
Plain drawing / pen-state commands.

Each handler checks its tokens with `validate` (raising a CommandError
subclass) and changes pen state or draws through `apply`, which validates
first, so invalid input never touches drawing state. Handlers hold no
state of their own and are shared through the COMMANDS table.
"""
from typing import List

from drawing import PALETTE, DEFAULT_TEXT_SIZE, PenState, DrawingSurface
from lexer import is_integer


class CommandError(Exception):
    """A single command failed its check or could not be applied."""
    pass


class ArityError(CommandError):
    """Wrong number of tokens."""
    pass


class ArgumentTypeError(CommandError):
    """A token has the wrong shape (integer, name, text, colour ...)."""
    pass


class UndefinedNameError(CommandError):
    pass


class DuplicateNameError(CommandError):
    pass


class ArgumentCountError(CommandError):
    """A method call passes a different number of arguments than defined."""
    pass


class UnsupportedCommandError(CommandError):
    pass


class EvaluationError(CommandError):
    """Raised while applying an otherwise valid command, e.g. division by zero."""
    pass


def _require_int(token: str, message: str, positive: bool = False) -> int:
    if not is_integer(token) or (positive and int(token) <= 0):
        raise ArgumentTypeError(message)
    return int(token)


def _is_text(token: str) -> bool:
    return len(token) >= 2 and token.startswith('"') and token.endswith('"')


class Command:
    name = ""

    def validate(self, parts: List[str]):
        raise NotImplementedError

    def apply(self, parts: List[str], pen: PenState, surface: DrawingSurface):
        self.validate(parts)
        self.draw(parts, pen, surface)

    def draw(self, parts: List[str], pen: PenState, surface: DrawingSurface):
        raise NotImplementedError


class MoveCommand(Command):
    """MOVE x y"""
    name = "MOVE"

    def validate(self, parts):
        if len(parts) != 3:
            raise ArityError("MOVE command should have 2 arguments. X and Y positions.")
        for token in parts[1:]:
            _require_int(token, "MOVE command arguments should be integers. X and Y positions.")

    def draw(self, parts, pen, surface):
        pen.move(int(parts[1]), int(parts[2]))
        surface.move_to(pen.x, pen.y)


class DrawCommand(Command):
    """DRAW x [y]: line from the pen to the new point; y defaults to the pen's y."""
    name = "DRAW"

    def validate(self, parts):
        if len(parts) not in (2, 3):
            raise ArityError("DRAW command should have 1 or 2 arguments. X and Y (optional) positions.")
        _require_int(parts[1], "DRAW command x argument should be an integer.")
        if len(parts) == 3:
            _require_int(parts[2], "DRAW command y argument should be an integer.")

    def draw(self, parts, pen, surface):
        x = int(parts[1])
        y = int(parts[2]) if len(parts) == 3 else pen.y
        surface.line_to(pen.x, pen.y, x, y, pen.color)
        pen.move(x, y)


class CircleCommand(Command):
    """CIRCLE radius, centred on the pen."""
    name = "CIRCLE"

    def validate(self, parts):
        if len(parts) != 2:
            raise ArityError("CIRCLE command should have 1 argument. Radius (e.g. CIRCLE 50)")
        _require_int(parts[1], "CIRCLE command radius argument should be a positive integer.",
                     positive=True)

    def draw(self, parts, pen, surface):
        radius = int(parts[1])
        diameter = radius * 2
        surface.fill_or_stroke_ellipse(pen.x - radius, pen.y - radius, diameter, diameter,
                                       pen.color, pen.fill)


class RectangleCommand(Command):
    """RECTANGLE width height, top-left corner at the pen."""
    name = "RECTANGLE"

    def validate(self, parts):
        if len(parts) != 3:
            raise ArityError("RECTANGLE command should have 2 arguments. Width and height.")
        _require_int(parts[1], "Invalid width for RECTANGLE command.", positive=True)
        _require_int(parts[2], "Invalid height for RECTANGLE command.", positive=True)

    def draw(self, parts, pen, surface):
        surface.fill_or_stroke_rectangle(pen.x, pen.y, int(parts[1]), int(parts[2]),
                                         pen.color, pen.fill)


class TriangleCommand(Command):
    """TRIANGLE base height: base runs right from the pen, apex above its middle."""
    name = "TRIANGLE"

    def validate(self, parts):
        if len(parts) != 3:
            raise ArityError("TRIANGLE command should have 2 arguments. Base length and height.")
        _require_int(parts[1], "Invalid base length for TRIANGLE command.", positive=True)
        _require_int(parts[2], "Invalid height for TRIANGLE command.", positive=True)

    def draw(self, parts, pen, surface):
        base, height = int(parts[1]), int(parts[2])
        points = [
            (pen.x, pen.y),
            (pen.x + base, pen.y),
            (pen.x + base // 2, pen.y - height),
        ]
        surface.fill_or_stroke_polygon(points, pen.color, pen.fill)


class ColorCommand(Command):
    name = "COLOR"

    def validate(self, parts):
        if len(parts) != 2:
            raise ArityError("COLOR command should have 1 argument.")
        if parts[1].upper() not in PALETTE:
            raise ArgumentTypeError(
                "COLOR command argument should be a valid color name. "
                f"Valid colors are: {', '.join(PALETTE)}")

    def draw(self, parts, pen, surface):
        pen.color = parts[1].upper()


class FillCommand(Command):
    name = "FILL"

    def validate(self, parts):
        if len(parts) != 2:
            raise ArityError("FILL command should have 1 argument.")
        if parts[1].upper() not in ("ON", "OFF"):
            raise ArgumentTypeError("FILL command argument should be ON or OFF.")

    def draw(self, parts, pen, surface):
        pen.fill = parts[1].upper() == "ON"


class ClearCommand(Command):
    name = "CLEAR"

    def validate(self, parts):
        if len(parts) != 1:
            raise ArityError("CLEAR command should have no arguments.")

    def draw(self, parts, pen, surface):
        surface.clear()


class ResetCommand(Command):
    """RESET puts the pen back at the origin with default colour and fill."""
    name = "RESET"

    def validate(self, parts):
        if len(parts) != 1:
            raise ArityError("RESET command should have no arguments.")

    def draw(self, parts, pen, surface):
        pen.reset()
        surface.move_to(pen.x, pen.y)


class WriteCommand(Command):
    """WRITE "text" or WRITE size "text", drawn at the pen position."""
    name = "WRITE"

    def validate(self, parts):
        if len(parts) not in (2, 3):
            raise ArityError('WRITE command should have 1 or 2 arguments. Optional size and "text".')
        if len(parts) == 3:
            _require_int(parts[1], "WRITE command size argument should be a positive integer.",
                         positive=True)
        if not _is_text(parts[-1]):
            raise ArgumentTypeError(
                'WRITE command text argument should be a string starting and ending with ".')

    def draw(self, parts, pen, surface):
        size = int(parts[1]) if len(parts) == 3 else DEFAULT_TEXT_SIZE
        surface.draw_text(parts[-1][1:-1], pen.x, pen.y, size, pen.color)


COMMANDS = {
    command.name: command for command in (
        MoveCommand(), DrawCommand(), CircleCommand(), RectangleCommand(),
        TriangleCommand(), ColorCommand(), FillCommand(), ClearCommand(),
        ResetCommand(), WriteCommand(),
    )
}
