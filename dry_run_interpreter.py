"""
Validate-only pass over a BOOSE program.

Every line is checked exactly once, in order, with the same grammar the
engine uses, but nothing is drawn and no cursor jumps happen. Variables
and methods live in a scratch ExecutionState: assignments record the
name (value 1) and method headers record the method and bring its
parameters into scope until ENDMETHOD, so later lines are checked
against the names they will see when the program runs.

Extracted from interpreter.py so the engine never imports it at load time.
"""
import logging
from typing import Optional

from commands import CommandError
from control_flow import ExecutionState
from drawing import RecordingSurface
from interpreter import Interpreter, Diagnostic, Program
from lexer import LexerError, tokenize, split_program

logger = logging.getLogger(__name__)


class DryRunInterpreter(Interpreter):

    def __init__(self, state: Optional[ExecutionState] = None):
        super().__init__(RecordingSurface())
        if state is not None:
            self.state = state

    def check_line(self, line: str, line_number: int = 1) -> Optional[Diagnostic]:
        try:
            self._record_line(line, line_number - 1)
        except (CommandError, LexerError) as e:
            return Diagnostic(line_number, line.strip(), str(e))
        return None

    def check_program(self, program: Program) -> Optional[Diagnostic]:
        lines = split_program(program)
        for index, line in enumerate(lines):
            diagnostic = self.check_line(line, index + 1)
            if diagnostic is not None:
                logger.info("%s", diagnostic)
                return diagnostic
        logger.debug("validated %d line(s)", len(lines))
        return None

    def _record_line(self, line: str, index: int):
        parts = tokenize(line)
        if not parts:
            return
        self.state.cursor = index
        self.current_line = index + 1

        keyword = self.classify(parts)
        parts = self.substitute(parts)
        special = self._special_commands.get(keyword)
        if special is not None:
            special.record(parts, self.state)
        else:
            self._resolve_command(keyword).validate(parts)
