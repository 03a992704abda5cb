import pytest
from file_handler import (
    read_program, write_program, is_program_file, ProgramFileError,
)


def test_write_then_read(tmp_path):
    path = tmp_path / "house.boose"
    write_program(path, "MOVE 10 10\nRECTANGLE 50 40")
    assert read_program(path) == "MOVE 10 10\nRECTANGLE 50 40\n"


def test_utf8_text(tmp_path):
    path = tmp_path / "hello.txt"
    write_program(path, 'WRITE "héllo wörld"\n')
    assert 'héllo wörld' in read_program(path)


def test_missing_file(tmp_path):
    with pytest.raises(ProgramFileError):
        read_program(tmp_path / "missing.boose")


def test_unwritable_path(tmp_path):
    with pytest.raises(ProgramFileError):
        write_program(tmp_path / "no_dir" / "x.boose", "CLEAR")


@pytest.mark.parametrize("name, expected", [
    ("a.boose", True),
    ("b.TXT", True),
    ("c.py", False),
])
def test_is_program_file(name, expected):
    assert is_program_file(name) == expected
