import pytest
from lexer import (
    Lexer, LexerError, tokenize, split_program, is_integer, is_valid_name,
    is_assignment_shape, is_call_shape, split_call, wrap_int32,
)

def test_unterminated_text_at_end():
    source = 'WRITE "hello'
    lexer = Lexer(source, "test.boose")
    with pytest.raises(LexerError) as excinfo:
        lexer.tokenize()
    # 'WRITE ' is 6 chars, so the quote is at column 7
    assert "test.boose:1:7: Unterminated text: missing closing '\"'" in str(excinfo.value)
    assert '\n  WRITE "hello\n        ^' in str(excinfo.value)

def test_unterminated_text_line_tracking():
    source = 'MOVE 10 10\n\nWRITE 20 "oops'
    lexer = Lexer(source, "test.boose")
    with pytest.raises(LexerError) as excinfo:
        lexer.tokenize()
    assert "test.boose:3:10:" in str(excinfo.value)
    assert "MOVE 10 10" not in str(excinfo.value)

def test_lexer_error_carries_position():
    with pytest.raises(LexerError) as excinfo:
        Lexer('"', "x.boose").tokenize()
    assert excinfo.value.line == 1
    assert excinfo.value.column == 1

def test_text_token_kept_whole():
    assert tokenize('WRITE "hello big world"') == ["WRITE", '"hello big world"']
    assert tokenize('WRITE 20 "a"') == ["WRITE", "20", '"a"']

def test_whitespace_runs_and_tabs():
    assert tokenize("  MOVE\t10    20  ") == ["MOVE", "10", "20"]
    assert tokenize("") == []
    assert tokenize("   ") == []

def test_adjacent_pieces_glued():
    assert tokenize('WRITE "a"b') == ["WRITE", '"a"b']

def test_blank_lines_keep_numbering():
    lines = split_program("MOVE 1 1\n\nDRAW 5")
    assert lines == ["MOVE 1 1", "", "DRAW 5"]
    assert Lexer("MOVE 1 1\n\nDRAW 5").tokenize() == [["MOVE", "1", "1"], [], ["DRAW", "5"]]

def test_split_program_accepts_lines():
    assert split_program(["A", "B"]) == ["A", "B"]

def test_is_integer_range():
    assert is_integer("0")
    assert is_integer("-15")
    assert is_integer("+7")
    assert is_integer("2147483647")
    assert not is_integer("2147483648")
    assert not is_integer("1.5")
    assert not is_integer("x")
    assert not is_integer("")

def test_wrap_int32():
    assert wrap_int32(2147483647 + 1) == -2147483648
    assert wrap_int32(-2147483648 - 1) == 2147483647
    assert wrap_int32(42) == 42

def test_valid_names():
    assert is_valid_name("count")
    assert is_valid_name("x1")
    assert not is_valid_name("12")
    assert not is_valid_name("a+b")
    assert not is_valid_name("f(x)")
    assert not is_valid_name("")

def test_assignment_and_call_shapes():
    assert is_assignment_shape(["x", "=", "5"])
    assert is_assignment_shape(["x", "=", "5", "+", "y"])
    assert not is_assignment_shape(["x", "5"])
    assert not is_assignment_shape(["MOVE", "10", "20"])
    assert is_call_shape(["Square(10)"])
    assert not is_call_shape(["Square(10)", "x"])
    assert not is_call_shape(["Square)("])

def test_split_call():
    assert split_call("Box(10,20)") == ("Box", ["10", "20"])
    assert split_call("Box()") == ("Box", [])
    assert split_call("Box( a , b )") == ("Box", ["a", "b"])
    assert split_call("Box(10)x") == ("Box", None)
    assert split_call("Box") == ("Box", None)
