"""
Line-cursor engine for BOOSE drawing programs.

A program is a list of source lines and a cursor. Each step tokenizes the
line under the cursor, classifies it, substitutes variable values and
routes it to a handler; handlers may rewrite the cursor to jump (WHILE
rewind, method call and return). The run loop then advances by one.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from commands import COMMANDS, Command, CommandError, UndefinedNameError, UnsupportedCommandError
from control_flow import ExecutionState
from drawing import DrawingSurface, PenState, Point, RecordingSurface
from lexer import (
    LexerError, tokenize, split_program, is_integer, is_numeric, has_invalid_word,
    is_assignment_shape, is_call_shape,
)
from special_commands import SPECIAL_COMMANDS, BLOCK_COMMANDS, SpecialCommand
from symbol_table import VariableStore

logger = logging.getLogger(__name__)

Program = Union[str, List[str]]


class InterpreterError(Exception):
    """A run stopped at its first failing line."""

    def __init__(self, line_number: int, line: str, message: str):
        super().__init__(f"Error at line {line_number}: {line}\n{message}")
        self.line_number = line_number
        self.line = line
        self.message = message


@dataclass
class Diagnostic:
    """First failure found by a validate-only pass."""
    line_number: int
    line: str
    message: str

    def __str__(self):
        return f"Syntax error at line {self.line_number}: {self.line}\n{self.message}"


class Interpreter:
    # Keywords whose arguments are words, not variables
    _NO_SUBSTITUTION = frozenset({"FILL", "COLOR", "METHOD"})

    def __init__(self, surface: Optional[DrawingSurface] = None):
        self.surface = surface if surface is not None else RecordingSurface()
        self.pen = PenState()
        self.state = ExecutionState()
        self.current_line = 0
        self._init_dispatch_tables()

    def _init_dispatch_tables(self):
        self._commands: Dict[str, Command] = dict(COMMANDS)
        self._special_commands: Dict[str, SpecialCommand] = dict(SPECIAL_COMMANDS)
        self._block_commands = dict(BLOCK_COMMANDS)

    @property
    def variables(self) -> VariableStore:
        return self.state.variables

    # ══════════════════════════════════════════════════════
    #  Per-line pipeline
    # ══════════════════════════════════════════════════════

    def classify(self, parts: List[str], variables: Optional[VariableStore] = None) -> str:
        """Keyword used for routing: "VAR", "METHOD" for a call, else the first token."""
        variables = variables if variables is not None else self.state.variables
        if variables.is_defined(parts[0]) or is_assignment_shape(parts):
            return "VAR"
        if is_call_shape(parts):
            return "METHOD"
        return parts[0]

    def substitute(self, parts: List[str], variables: Optional[VariableStore] = None) -> List[str]:
        """Replace variable names after the first token with their values."""
        if parts[0] in self._NO_SUBSTITUTION:
            return list(parts)
        variables = variables if variables is not None else self.state.variables
        substituted = [parts[0]]
        for token in parts[1:]:
            if is_integer(token) or is_numeric(token) or has_invalid_word(token):
                substituted.append(token)
                continue
            value = variables.lookup(token)
            if value is None:
                raise UndefinedNameError(f"Variable '{token}' is not defined.")
            substituted.append(str(value))
        return substituted

    def _resolve_command(self, keyword: str) -> Command:
        command = self._commands.get(keyword)
        if command is not None:
            return command
        upper = keyword.upper()
        if upper in self._commands or upper in self._special_commands:
            raise UnsupportedCommandError(
                f"Command '{keyword}' must be in uppercase. Valid commands are: "
                + ", ".join(sorted(self._commands)))
        raise UnsupportedCommandError(f"Unsupported command '{keyword}'.")

    def execute_line(self, line: str, cursor: int = 0) -> int:
        """Execute one source line found at index `cursor`; return the new cursor.

        Raises CommandError (or LexerError) without touching the pen or the
        surface when the line is invalid.
        """
        parts = tokenize(line)
        if not parts:
            return cursor

        state = self.state
        state.cursor = cursor
        self.current_line = cursor + 1

        # Inside a skipped block only the owning handler sees the line
        if state.frames.suspended:
            handler = self._block_commands[state.frames.top.kind]
            handler.skip(parts, state)
            return state.cursor

        keyword = self.classify(parts)
        parts = self.substitute(parts)
        logger.debug("line %d: %s", cursor + 1, " ".join(parts))

        special = self._special_commands.get(keyword)
        if special is not None:
            special.apply(parts, state)
        else:
            self._resolve_command(keyword).apply(parts, self.pen, self.surface)
        return state.cursor

    # ══════════════════════════════════════════════════════
    #  Whole programs
    # ══════════════════════════════════════════════════════

    def run(self, program: Program):
        """Run a program from its first line.

        Variables, methods and control stacks start empty; the pen and the
        surface carry over from earlier runs. The first failing line aborts
        the run with InterpreterError.
        """
        lines = split_program(program)
        self.state.reset()
        logger.info("running program of %d line(s)", len(lines))

        cursor = 0
        while cursor < len(lines):
            line = lines[cursor]
            try:
                cursor = self.execute_line(line, cursor)
            except (CommandError, LexerError) as e:
                error = InterpreterError(cursor + 1, line.strip(), str(e))
                logger.warning("run aborted: %s", error)
                raise error from e
            cursor += 1

        if self.state.frames.depth:
            logger.warning("program ended with %d unclosed block(s): %s",
                           self.state.frames.depth,
                           [kind.value for kind in self.state.frames.kinds()[1:]])

    def validate(self, program: Program) -> Optional[Diagnostic]:
        """Check every line of a program without drawing; None when it passes."""
        from dry_run_interpreter import DryRunInterpreter
        return DryRunInterpreter().check_program(program)

    def validate_line(self, line: str) -> Optional[Diagnostic]:
        """Check one line against copies of the current variables and methods."""
        from dry_run_interpreter import DryRunInterpreter
        return DryRunInterpreter(self.state.scratch_copy()).check_line(line)

    def reset(self):
        self.surface.clear()
        self.pen.reset()
        self.state.reset()
        self.current_line = 0

    # ══════════════════════════════════════════════════════
    #  Status
    # ══════════════════════════════════════════════════════

    @property
    def position(self) -> Point:
        return self.pen.position

    @property
    def fill(self) -> bool:
        return self.pen.fill

    @property
    def color_name(self) -> str:
        return self.pen.color_name

    def status_text(self) -> str:
        x, y = self.position
        return (f"Position: {{X={x}, Y={y}}}\n"
                f"Fill: {'ON' if self.fill else 'OFF'}\n"
                f"Color: {self.color_name}")


class InteractiveSession:
    """Feeds lines typed one at a time into a persistent interpreter.

    Typed lines are kept as a growing program so that loops and method
    calls entered interactively can jump back over earlier lines. A line
    that fails is dropped from the history; when the failure comes from a
    replayed line, the open blocks and calls are abandoned as well.
    """

    def __init__(self, interpreter: Interpreter):
        self.interpreter = interpreter
        self.history: List[str] = []

    def feed(self, line: str):
        self.history.append(line)
        cursor = len(self.history) - 1
        try:
            cursor = self.interpreter.execute_line(line, cursor) + 1
        except (CommandError, LexerError):
            self.history.pop()
            raise
        # Replay whatever a jump sent us back over
        try:
            while cursor < len(self.history):
                cursor = self.interpreter.execute_line(self.history[cursor], cursor) + 1
        except (CommandError, LexerError):
            # Abandon the loops and calls the replay was inside; variables
            # and methods defined so far stay
            self.history.pop()
            self.interpreter.state.reset_stacks()
            raise

    def clear(self):
        self.history.clear()
