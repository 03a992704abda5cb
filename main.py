import sys
import logging
from file_handler import read_program, ProgramFileError
from interpreter import Interpreter, InterpreterError, InteractiveSession
from commands import CommandError
from lexer import LexerError
from drawing import RecordingSurface

USAGE = "Usage: python main.py <file.boose> [--check] [--verbose] [--dump]"


def dump(interpreter):
    print("\n" + "=" * 60)
    print("DRAWING PRIMITIVES")
    print("=" * 60)
    for op in interpreter.surface.operations:
        print(f"  {op.name}{op.args}")
    interpreter.variables.debug_dump()
    print(interpreter.status_text())


def run_file(filename, check_only=False, show_dump=False):
    try:
        source = read_program(filename)
    except ProgramFileError as e:
        print(f"File Error: {e}")
        return 1
    return run(source, check_only, show_dump)


def run(source, check_only=False, show_dump=False):
    interpreter = Interpreter(RecordingSurface())

    diagnostic = interpreter.validate(source)
    if diagnostic is not None:
        print(diagnostic)
        return 1
    if check_only:
        print("Syntax check passed.")
        return 0

    try:
        interpreter.run(source)
    except InterpreterError as e:
        print(f"Runtime {e}")
        return 1
    finally:
        if show_dump:
            dump(interpreter)
    return 0


def repl():
    print("BOOSE Interpreter (Type 'exit' to quit, 'status' for the pen and variables)")
    session = InteractiveSession(Interpreter(RecordingSurface()))
    while True:
        try:
            line = input(">>> ")
        except EOFError:
            break
        if line.strip().lower() == 'exit':
            break
        if line.strip().lower() == 'status':
            print(session.interpreter.status_text())
            for name, value in sorted(session.interpreter.variables.snapshot().items()):
                print(f"  {name} = {value}")
            continue
        try:
            session.feed(line)
        except (CommandError, LexerError) as e:
            print(f"Error: {e}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        repl()
        return 0

    filename = None
    check_only = False
    show_dump = False
    i = 0
    while i < len(argv):
        if argv[i] == '--check':
            check_only = True
        elif argv[i] == '--verbose':
            logging.basicConfig(level=logging.DEBUG,
                                format="%(levelname)s %(name)s: %(message)s")
        elif argv[i] == '--dump':
            show_dump = True
        else:
            filename = argv[i]
        i += 1
    if filename:
        return run_file(filename, check_only, show_dump)
    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main())
