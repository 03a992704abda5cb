"""
Control-flow bookkeeping for the line-cursor engine.

One stack of frames tracks every open IF / WHILE / METHOD block; the top
frame decides whether lines are executed or skipped. Method calls and
WHILE loops keep their own LIFO records beside it. Everything a run
mutates lives in ExecutionState, so two interpreters never share state.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from symbol_table import VariableStore, MethodTable


class Construct(Enum):
    """Block kinds that can sit on the control stack."""
    IF = "IF"
    WHILE = "WHILE"
    METHOD = "METHOD"


@dataclass(frozen=True)
class Frame:
    """One open block.

    suspended: lines up to the matching closer are skipped.
    inert: pushed only to keep closer matching inside an already skipped
           region; closing it has no other effect.
    """
    kind: Optional[Construct]
    suspended: bool = False
    inert: bool = False


BASE_FRAME = Frame(None, suspended=False)


class ControlStack:
    """Stack of Frames that always keeps the base "not suspended" frame."""

    def __init__(self):
        self._frames: List[Frame] = [BASE_FRAME]

    @property
    def top(self) -> Frame:
        return self._frames[-1]

    @property
    def suspended(self) -> bool:
        return self.top.suspended

    @property
    def depth(self) -> int:
        """Number of open blocks (the base frame is not counted)."""
        return len(self._frames) - 1

    def top_is(self, kind: Construct) -> bool:
        return self.top.kind is kind

    def push(self, kind: Construct, suspended: bool, inert: bool = False) -> Frame:
        frame = Frame(kind, suspended, inert)
        self._frames.append(frame)
        return frame

    def pop(self) -> Optional[Frame]:
        # The base frame is never removed; a stray closer leaves it in place
        if len(self._frames) == 1:
            return None
        return self._frames.pop()

    def reset(self):
        self._frames = [BASE_FRAME]

    def kinds(self) -> List[Optional[Construct]]:
        return [frame.kind for frame in self._frames]

    def __len__(self) -> int:
        return len(self._frames)


@dataclass
class CallFrame:
    """A method call in flight: where to resume once ENDMETHOD is reached."""
    method: str
    return_line: int


@dataclass
class LoopFrame:
    """One active WHILE instance.

    header_line is None when the condition was false on entry; the body is
    skipped then and the value is never used as a jump target.
    """
    header_line: Optional[int]
    condition: bool


@dataclass
class ExecutionState:
    variables: VariableStore = field(default_factory=VariableStore)
    methods: MethodTable = field(default_factory=MethodTable)
    frames: ControlStack = field(default_factory=ControlStack)
    calls: List[CallFrame] = field(default_factory=list)
    loops: List[LoopFrame] = field(default_factory=list)
    # Names of method definitions whose ENDMETHOD has not been reached yet
    definitions: List[str] = field(default_factory=list)
    cursor: int = 0

    def reset_stacks(self):
        while self.variables.scope_level:
            self.variables.exit_scope()
        self.frames.reset()
        self.calls.clear()
        self.loops.clear()
        self.definitions.clear()
        self.cursor = 0

    def reset(self):
        self.variables.clear()
        self.methods.clear()
        self.reset_stacks()

    def scratch_copy(self) -> 'ExecutionState':
        """Copies of the variables and methods with fresh stacks."""
        return ExecutionState(self.variables.copy(), self.methods.copy())
