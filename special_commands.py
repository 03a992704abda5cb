"""
Commands that work on variables, methods and the control stack:
VAR, IF/ENDIF, WHILE/ENDWHILE and METHOD/ENDMETHOD/calls.

Every handler offers three operations:
  validate(parts, state)  check the (already substituted) tokens
  apply(parts, state)     run the command; may move state.cursor
  record(parts, state)    validate-only pass: check, then keep the scratch
                          variables / methods in step so later lines check
                          against the names they will see when run

While the top control frame is suspended the dispatcher routes every line
to `skip` on the handler owning that frame, which only tracks block nesting
until the matching closer turns up.
"""
import logging
import operator
from typing import List, Optional

from commands import (
    ArityError, ArgumentTypeError, UndefinedNameError, DuplicateNameError,
    ArgumentCountError, EvaluationError,
)
from control_flow import Construct, CallFrame, LoopFrame, ExecutionState
from lexer import is_integer, is_numeric, has_invalid_word, is_valid_name, split_call, wrap_int32

logger = logging.getLogger(__name__)

COMPARISONS = {
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    "<=": operator.le,
}

# Value a validate-only pass gives every variable and parameter; positive so
# that size and radius arguments check as they would with real values
PLACEHOLDER_VALUE = 1

# Lines that open a block, by keyword
OPENERS = {
    "IF": Construct.IF,
    "WHILE": Construct.WHILE,
    "METHOD": Construct.METHOD,
}


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    if right == 0:
        raise EvaluationError("Division by zero.")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}


class SpecialCommand:
    kind: Optional[Construct] = None
    closer: Optional[str] = None

    def validate(self, parts: List[str], state: ExecutionState):
        raise NotImplementedError

    def apply(self, parts: List[str], state: ExecutionState):
        raise NotImplementedError

    def record(self, parts: List[str], state: ExecutionState):
        self.validate(parts, state)

    def close(self, parts: List[str], state: ExecutionState):
        pass

    def skip(self, parts: List[str], state: ExecutionState):
        """Handle a line inside a suspended block owned by this handler.

        A nested opener pushes a suspended inert frame (its condition is never
        evaluated) so that its own closer is matched to it rather than to the
        block being skipped.
        """
        keyword = parts[0]
        if keyword == self.closer:
            self.close(parts, state)
        elif keyword in OPENERS:
            state.frames.push(OPENERS[keyword], suspended=True, inert=True)


def _check_closer(parts: List[str]):
    if len(parts) != 1:
        raise ArityError(f"{parts[0]} command should have no arguments.")


def _check_comparison(parts: List[str], keyword: str):
    if len(parts) != 4:
        raise ArityError(
            f"{keyword} command should have 3 arguments. First value/variable, "
            f"comparison operator, second value/variable (e.g. {keyword} x > 10)")
    if parts[2] not in COMPARISONS:
        raise ArgumentTypeError(
            "Invalid comparison operator. Valid operators are: " + ", ".join(COMPARISONS))
    if not is_integer(parts[1]):
        raise ArgumentTypeError(
            "Invalid first value. The first value should be a valid integer or a valid variable.")
    if not is_integer(parts[3]):
        raise ArgumentTypeError(
            "Invalid second value. The second value should be a valid integer or a valid variable.")


def evaluate_condition(parts: List[str]) -> bool:
    return COMPARISONS[parts[2]](int(parts[1]), int(parts[3]))


class VariableCommand(SpecialCommand):
    """NAME = VALUE [OP VALUE2]"""

    def validate(self, parts, state):
        if len(parts) < 3:
            raise ArityError(
                "Variable command should have at least 3 arguments. "
                "Variable name, = sign and value (e.g. Count = 50)")
        if is_numeric(parts[0]):
            raise ArgumentTypeError(
                "Variable command variable name argument should be a string (e.g. Count = 50)")
        if has_invalid_word(parts[0]):
            raise ArgumentTypeError(
                "Variable command variable name argument should not contain an invalid word "
                "or symbol (e.g. Count = 50)")
        if parts[1] != "=":
            raise ArgumentTypeError(
                "Variable command should have = sign between the variable name and value "
                "(e.g. Count = 50)")
        if not is_integer(parts[2]):
            raise ArgumentTypeError(
                "Variable command value argument should be an integer (e.g. Count = 50)")
        if len(parts) > 3 and parts[3] not in ARITHMETIC:
            raise ArgumentTypeError(
                "Variable command operator argument should be +, -, * or / (e.g. Count = 1 + 1)")
        if len(parts) == 4:
            raise ArityError(
                "Variable command operator needs a second value (e.g. Count = 1 + 1)")
        if len(parts) > 4 and not is_integer(parts[4]):
            raise ArgumentTypeError(
                "Variable command value argument should be an integer (e.g. Count = 1 + 1)")
        if len(parts) > 5:
            raise ArityError(
                "Variable command should have at most 5 arguments. Variable name, = sign, "
                "value, operator and value (e.g. Count = 1 + 1)")

    @staticmethod
    def evaluate(parts: List[str]) -> int:
        value = int(parts[2])
        if len(parts) == 5:
            value = ARITHMETIC[parts[3]](value, int(parts[4]))
        return wrap_int32(value)

    def apply(self, parts, state):
        self.validate(parts, state)
        state.variables.assign(parts[0], self.evaluate(parts))

    def record(self, parts, state):
        self.validate(parts, state)
        # Values are not known without running; the name is what later lines need
        state.variables.assign(parts[0], PLACEHOLDER_VALUE)


class IfCommand(SpecialCommand):
    """IF a op b ... ENDIF"""
    kind = Construct.IF
    closer = "ENDIF"

    def validate(self, parts, state):
        if parts[0] == self.closer:
            return _check_closer(parts)
        _check_comparison(parts, "IF")

    def apply(self, parts, state):
        self.validate(parts, state)
        if parts[0] == self.closer:
            return self.close(parts, state)
        condition = evaluate_condition(parts)
        state.frames.push(Construct.IF, suspended=not condition)

    def close(self, parts, state):
        # An ENDIF with no open IF on top is a no-op
        if state.frames.top_is(Construct.IF):
            state.frames.pop()


class WhileCommand(SpecialCommand):
    """WHILE a op b ... ENDWHILE

    Iteration is re-entry: a finished pass whose condition held rewinds the
    cursor to one line before the header, so the engine's increment lands
    on the WHILE line and the condition is evaluated afresh.
    """
    kind = Construct.WHILE
    closer = "ENDWHILE"

    def validate(self, parts, state):
        if parts[0] == self.closer:
            return _check_closer(parts)
        _check_comparison(parts, "WHILE")

    def apply(self, parts, state):
        self.validate(parts, state)
        if parts[0] == self.closer:
            return self.close(parts, state)
        condition = evaluate_condition(parts)
        state.frames.push(Construct.WHILE, suspended=not condition)
        state.loops.append(LoopFrame(state.cursor if condition else None, condition))

    def close(self, parts, state):
        if not state.frames.top_is(Construct.WHILE):
            return
        frame = state.frames.pop()
        if frame.inert:
            return
        loop = state.loops.pop()
        if loop.condition:
            state.cursor = loop.header_line - 1
            logger.debug("ENDWHILE: rewinding to line %d", loop.header_line + 1)


class MethodCommand(SpecialCommand):
    """METHOD name(p1,p2) ... ENDMETHOD, and calls name(a1,a2).

    A definition records the body without running it. A call pushes a call
    frame and a parameter scope, then jumps to the header line; ENDMETHOD
    pops both and jumps back to the calling line.
    """
    kind = Construct.METHOD
    closer = "ENDMETHOD"

    def validate(self, parts, state):
        if parts[0] == self.closer:
            return _check_closer(parts)
        if len(parts) == 1:
            return self._validate_call(parts[0], state)
        if parts[0] != "METHOD" or len(parts) != 2:
            raise ArityError(
                "The METHOD command should have 1 argument: methodName(<parameter list>).")
        self._validate_header(parts[1], state)

    def _validate_call(self, word, state):
        name, args = split_call(word)
        if args is None or not is_valid_name(name):
            raise ArgumentTypeError(
                "Invalid method name. The method call should be in the format: "
                "methodName(<parameter list>).")
        if name not in state.methods:
            raise UndefinedNameError(f"Invalid method call. Method {name} is not defined.")
        for arg in args:
            if is_integer(arg):
                continue
            if not is_valid_name(arg):
                raise ArgumentTypeError(
                    "Invalid parameter list. The parameter list should be in the format: "
                    "methodName(<parameter list>).")
            if not state.variables.is_defined(arg):
                raise UndefinedNameError(
                    f"Invalid parameter list. The variable '{arg}' is not defined.")
        expected = len(state.methods.get(name).params)
        if len(args) != expected:
            raise ArgumentCountError(
                f"Invalid parameter list. The method '{name}' expects {expected} parameter(s), "
                f"got {len(args)}.")

    def _validate_header(self, word, state):
        name, params = split_call(word)
        if params is None or not is_valid_name(name):
            raise ArgumentTypeError(
                "Invalid method name. The method name should be in the format: "
                "methodName(<parameter list>).")
        if name in state.methods:
            raise DuplicateNameError(
                f"The method name should be unique. The method name '{name}' is already used.")
        for param in params:
            if not is_valid_name(param):
                raise ArgumentTypeError(
                    "Invalid parameter list. The parameter list should be in the format: "
                    "methodName(<parameter list>).")
        if len(set(params)) != len(params):
            raise DuplicateNameError(f"Method '{name}' declares the same parameter twice.")

    def apply(self, parts, state):
        self.validate(parts, state)
        if parts[0] == self.closer:
            return self.close(parts, state)
        if parts[0] == "METHOD":
            self._define(parts[1], state)
        else:
            self._call(parts[0], state)

    def _define(self, word, state):
        name, params = split_call(word)
        state.methods.define(name, params, state.cursor)
        state.frames.push(Construct.METHOD, suspended=True)
        state.definitions.append(name)

    def _call(self, word, state):
        name, args = split_call(word)
        definition = state.methods.get(name)
        values = [int(arg) if is_integer(arg) else state.variables.get(arg) for arg in args]
        state.calls.append(CallFrame(name, state.cursor))
        state.frames.push(Construct.METHOD, suspended=False)
        state.variables.enter_scope(dict(zip(definition.params, values)))
        logger.debug("call %s%s: line %d -> %d", name, tuple(values),
                     state.cursor + 1, definition.start_line + 2)
        state.cursor = definition.start_line

    def close(self, parts, state):
        top = state.frames.top
        if top.kind is not Construct.METHOD:
            return
        if top.suspended:
            state.frames.pop()
            if not top.inert:
                name = state.definitions.pop()
                state.methods.close(name, state.cursor)
            return
        if not state.calls:
            return
        state.frames.pop()
        call = state.calls.pop()
        state.variables.exit_scope()
        logger.debug("return from %s to line %d", call.method, call.return_line + 1)
        state.cursor = call.return_line

    def record(self, parts, state):
        self.validate(parts, state)
        if parts[0] == self.closer:
            if state.definitions:
                state.methods.close(state.definitions.pop(), state.cursor)
                state.variables.exit_scope()
        elif parts[0] == "METHOD":
            name, params = split_call(parts[1])
            state.methods.define(name, params, state.cursor)
            state.definitions.append(name)
            # Parameters are visible to the body lines that follow
            state.variables.enter_scope({param: PLACEHOLDER_VALUE for param in params})


SPECIAL_COMMANDS = {
    "VAR": VariableCommand(),
    "IF": IfCommand(),
    "WHILE": WhileCommand(),
    "METHOD": MethodCommand(),
}
SPECIAL_COMMANDS["ENDIF"] = SPECIAL_COMMANDS["IF"]
SPECIAL_COMMANDS["ENDWHILE"] = SPECIAL_COMMANDS["WHILE"]
SPECIAL_COMMANDS["ENDMETHOD"] = SPECIAL_COMMANDS["METHOD"]

# Handler owning each kind of block, for routing lines while suspended
BLOCK_COMMANDS = {
    Construct.IF: SPECIAL_COMMANDS["IF"],
    Construct.WHILE: SPECIAL_COMMANDS["WHILE"],
    Construct.METHOD: SPECIAL_COMMANDS["METHOD"],
}
