"""
Program file load/save for the BOOSE hosts.

Programs are plain UTF-8 text, one command per line.
"""
import os

PROGRAM_EXTENSIONS = (".boose", ".txt")

# Filter list for the desktop file dialogs
FILE_TYPES = [
    ("BOOSE programs", "*.boose"),
    ("Text files", "*.txt"),
    ("All files", "*.*"),
]


class ProgramFileError(Exception):
    """Raised when a program file cannot be read or written."""
    pass


def _require_file(path):
    """Guard clause: raise if the path is not an existing file."""
    if not os.path.isfile(path):
        raise ProgramFileError(f"Program file {path} does not exist")


def is_program_file(path) -> bool:
    return os.path.splitext(path)[1].lower() in PROGRAM_EXTENSIONS


def read_program(path) -> str:
    """Return the program text, line endings normalised to "\\n"."""
    _require_file(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ProgramFileError(f"Failed to read program {path}: {e}")


def write_program(path, source: str):
    """Write the program text; a missing trailing newline is added."""
    if source and not source.endswith("\n"):
        source += "\n"
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(source)
    except OSError as e:
        raise ProgramFileError(f"Failed to write program {path}: {e}")
