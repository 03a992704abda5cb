from dataclasses import dataclass, field
from typing import Dict, List, Optional
from copy import deepcopy


@dataclass
class MethodDefinition:
    """Method table entry: parameter names plus the line span of the body.

    `start_line` is the index of the METHOD header; a call jumps there so the
    next cursor step lands on the first body line. `end_line` stays None
    until the matching ENDMETHOD has been reached.
    """
    name: str
    params: List[str] = field(default_factory=list)
    start_line: int = 0
    end_line: Optional[int] = None


class VariableStore:
    """Integer variables: one global mapping plus a stack of call scopes.

    Each in-flight method call pushes a scope holding its parameters. Only
    the innermost call scope shadows the globals, so a parameter of an outer
    call is invisible inside a nested call.
    """

    def __init__(self):
        self.globals: Dict[str, int] = {}
        # Call scopes: innermost at the end
        self.scopes: List[Dict[str, int]] = []

    @property
    def scope_level(self) -> int:
        return len(self.scopes)

    def enter_scope(self, bindings: Optional[Dict[str, int]] = None):
        """Enter a new call scope with the given parameter bindings."""
        self.scopes.append(dict(bindings or {}))

    def exit_scope(self) -> Dict[str, int]:
        """Exit the innermost call scope, discarding its parameters."""
        if not self.scopes:
            raise RuntimeError("Cannot exit global scope")
        return self.scopes.pop()

    def is_shadowed(self, name: str) -> bool:
        return bool(self.scopes) and name in self.scopes[-1]

    def lookup(self, name: str) -> Optional[int]:
        if self.is_shadowed(name):
            return self.scopes[-1][name]
        return self.globals.get(name)

    def is_defined(self, name: str) -> bool:
        return self.is_shadowed(name) or name in self.globals

    def __contains__(self, name: str) -> bool:
        return self.is_defined(name)

    def get(self, name: str) -> int:
        value = self.lookup(name)
        if value is None:
            raise NameError(f"Variable '{name}' is not defined")
        return value

    def assign(self, name: str, value: int):
        """Assign to the call-scope parameter if one shadows `name`, else the global."""
        if self.is_shadowed(name):
            self.scopes[-1][name] = value
        else:
            self.globals[name] = value

    def clear(self):
        self.globals.clear()
        self.scopes.clear()

    def copy(self) -> 'VariableStore':
        return deepcopy(self)

    def snapshot(self) -> Dict[str, int]:
        """Visible bindings: globals overlaid with the innermost call scope."""
        visible = dict(self.globals)
        if self.scopes:
            visible.update(self.scopes[-1])
        return visible

    def debug_dump(self):
        print("=" * 60)
        print("VARIABLE STORE DUMP")
        print("=" * 60)
        print("\n--- Globals ---")
        for name, value in sorted(self.globals.items()):
            print(f"  {name} = {value}")
        for level, scope in enumerate(self.scopes, start=1):
            print(f"\n--- Call scope {level} ---")
            for name, value in sorted(scope.items()):
                print(f"  {name} = {value} [param]")
        print("\n" + "=" * 60)


class MethodTable:
    """Method name -> MethodDefinition. Names are globally unique."""

    def __init__(self):
        self.methods: Dict[str, MethodDefinition] = {}

    def define(self, name: str, params: List[str], start_line: int) -> MethodDefinition:
        if name in self.methods:
            raise NameError(f"Method '{name}' is already defined")
        definition = MethodDefinition(name, list(params), start_line)
        self.methods[name] = definition
        return definition

    def get(self, name: str) -> MethodDefinition:
        definition = self.methods.get(name)
        if definition is None:
            raise NameError(f"Method '{name}' is not defined")
        return definition

    def close(self, name: str, end_line: int):
        self.get(name).end_line = end_line

    def __contains__(self, name: str) -> bool:
        return name in self.methods

    def __len__(self) -> int:
        return len(self.methods)

    def clear(self):
        self.methods.clear()

    def copy(self) -> 'MethodTable':
        return deepcopy(self)
