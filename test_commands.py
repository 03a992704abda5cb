import pytest
from commands import (
    COMMANDS, ArityError, ArgumentTypeError,
)
from drawing import PenState, RecordingSurface, Primitive, DEFAULT_TEXT_SIZE


@pytest.fixture
def pen():
    return PenState()


@pytest.fixture
def surface():
    return RecordingSurface()


def apply(line, pen, surface):
    parts = line.split()
    COMMANDS[parts[0]].apply(parts, pen, surface)


def test_move(pen, surface):
    apply("MOVE 100 150", pen, surface)
    assert pen.position == (100, 150)
    assert surface.operations == [Primitive("move_to", (100, 150))]


def test_draw_line_and_move(pen, surface):
    apply("MOVE 10 10", pen, surface)
    apply("DRAW 50 60", pen, surface)
    assert surface.of("line_to") == [Primitive("line_to", (10, 10, 50, 60, "BLACK"))]
    assert pen.position == (50, 60)


def test_draw_single_argument_keeps_y(pen, surface):
    apply("MOVE 10 20", pen, surface)
    apply("DRAW 70", pen, surface)
    assert surface.of("line_to")[0].args == (10, 20, 70, 20, "BLACK")


def test_circle_centred_on_pen(pen, surface):
    apply("MOVE 100 100", pen, surface)
    apply("CIRCLE 30", pen, surface)
    assert surface.of("ellipse")[0].args == (70, 70, 60, 60, "BLACK", False)


def test_rectangle_uses_fill_and_color(pen, surface):
    apply("COLOR red", pen, surface)
    apply("FILL ON", pen, surface)
    apply("RECTANGLE 40 20", pen, surface)
    assert surface.of("rectangle")[0].args == (0, 0, 40, 20, "RED", True)


def test_triangle_points(pen, surface):
    apply("MOVE 10 100", pen, surface)
    apply("TRIANGLE 50 40", pen, surface)
    points, color, filled = surface.of("polygon")[0].args
    assert points == ((10, 100), (60, 100), (35, 60))
    assert (color, filled) == ("BLACK", False)


def test_write_default_and_sized(pen, surface):
    apply("COLOR BLUE", pen, surface)
    COMMANDS["WRITE"].apply(["WRITE", '"hello world"'], pen, surface)
    COMMANDS["WRITE"].apply(["WRITE", "20", '"big"'], pen, surface)
    assert surface.of("text") == [
        Primitive("text", ("hello world", 0, 0, DEFAULT_TEXT_SIZE, "BLUE")),
        Primitive("text", ("big", 0, 0, 20, "BLUE")),
    ]


def test_clear_and_reset(pen, surface):
    apply("MOVE 5 5", pen, surface)
    apply("COLOR GREEN", pen, surface)
    apply("FILL on", pen, surface)
    apply("CLEAR", pen, surface)
    assert pen.position == (5, 5)
    apply("RESET", pen, surface)
    assert pen == PenState()
    assert surface.names() == ["move_to", "clear", "move_to"]


def test_color_name_display(pen, surface):
    apply("COLOR GREEN", pen, surface)
    assert pen.color_name == "Green"


@pytest.mark.parametrize("line, error", [
    ("MOVE 10", ArityError),
    ("MOVE 10 a", ArgumentTypeError),
    ("DRAW", ArityError),
    ("DRAW 1 2 3", ArityError),
    ("CIRCLE 0", ArgumentTypeError),
    ("CIRCLE -5", ArgumentTypeError),
    ("CIRCLE", ArityError),
    ("RECTANGLE 0 5", ArgumentTypeError),
    ("RECTANGLE 5", ArityError),
    ("TRIANGLE 5 x", ArgumentTypeError),
    ("COLOR PURPLE", ArgumentTypeError),
    ("FILL MAYBE", ArgumentTypeError),
    ("CLEAR now", ArityError),
    ("RESET 1", ArityError),
    ("WRITE hello", ArgumentTypeError),
    ("WRITE", ArityError),
])
def test_invalid_commands(line, error, pen, surface):
    with pytest.raises(error):
        apply(line, pen, surface)
    # Invalid input never reaches the pen or the surface
    assert pen == PenState()
    assert surface.operations == []


def test_write_size_must_be_positive(pen, surface):
    with pytest.raises(ArgumentTypeError):
        COMMANDS["WRITE"].apply(["WRITE", "0", '"x"'], pen, surface)
