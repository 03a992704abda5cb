import pytest
from drawing import RecordingSurface
from dry_run_interpreter import DryRunInterpreter
from interpreter import Interpreter, Diagnostic


@pytest.fixture
def interp():
    return Interpreter(RecordingSurface())


PROGRAM = "\n".join([
    "count = 0",
    "size = 10",
    "METHOD Down(n)",
    "IF n > 0",
    "count = count + 1",
    "CIRCLE size",
    "m = n - 1",
    "Down(m)",
    "ENDIF",
    "ENDMETHOD",
    "WHILE count < 3",
    "count = count + 1",
    "ENDWHILE",
    'WRITE 14 "done"',
    "Down(3)",
])


def test_valid_program_passes(interp):
    assert interp.validate(PROGRAM) is None


def test_validate_then_run(interp):
    assert interp.validate(PROGRAM) is None
    interp.run(PROGRAM)
    assert len(interp.surface.of("ellipse")) == 3


def test_validate_draws_nothing(interp):
    interp.validate("MOVE 10 10\nCIRCLE 5")
    assert interp.surface.operations == []
    assert interp.position == (0, 0)


def test_first_error_reported_with_line(interp):
    diagnostic = interp.validate("MOVE 1 1\n\nCIRCLE\nDRAW")
    assert diagnostic == Diagnostic(3, "CIRCLE", diagnostic.message)
    assert "CIRCLE command should have 1 argument" in diagnostic.message
    assert str(diagnostic).startswith("Syntax error at line 3: CIRCLE\n")


def test_placeholder_values_are_positive(interp):
    assert interp.validate("r = 0 - 5\nCIRCLE r") is None


@pytest.mark.parametrize("program, line_number", [
    ("MOVE x 1", 1),
    ("Box()", 1),
    ("METHOD Box(w)\nENDMETHOD\nBox(1,2)", 3),
    ("METHOD Box()\nENDMETHOD\nMETHOD Box()", 3),
    ("x = 1\nIF x >> 2\nENDIF", 2),
    ("color RED", 1),
    ("SPIN 3", 1),
    ('WRITE "open', 1),
])
def test_errors_found(interp, program, line_number):
    diagnostic = interp.validate(program)
    assert diagnostic is not None
    assert diagnostic.line_number == line_number


def test_parameters_visible_only_inside_body(interp):
    assert interp.validate("METHOD Box(w)\nRECTANGLE w w\nENDMETHOD") is None
    diagnostic = interp.validate("METHOD Box(w)\nENDMETHOD\nCIRCLE w")
    assert diagnostic.line_number == 3


def test_skipped_branches_still_checked(interp):
    # A run never substitutes inside the false branch; the check scans every line
    program = "IF 1 > 2\nMOVE ghost 5\nENDIF"
    interp.run(program)
    diagnostic = interp.validate(program)
    assert diagnostic.line_number == 2
    assert "'ghost' is not defined" in diagnostic.message


def test_validate_starts_from_empty_state(interp):
    interp.run("x = 1")
    assert interp.validate("MOVE x 1") is not None


def test_validate_line_uses_current_state(interp):
    interp.execute_line("x = 4")
    assert interp.validate_line("MOVE x x") is None
    assert interp.validate_line("MOVE y 1") is not None
    # Checking never changes the real state
    interp.validate_line("z = 3")
    assert "z" not in interp.variables


def test_check_line_default_number():
    diagnostic = DryRunInterpreter().check_line("FILL MAYBE")
    assert diagnostic.line_number == 1
    assert diagnostic.line == "FILL MAYBE"
