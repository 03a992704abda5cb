import re
from typing import List, Optional, Tuple

# Any word containing one of these cannot be a variable, method or parameter name
RESERVED_WORDS = (
    "=", "<", ">", "<=", ">=", "==", "!=", "!",
    "+", "-", "*", "/",
    "(", ")", "{", "}", ";", ":", ",", ".", " ", '"',
)

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

_INTEGER = re.compile(r'[+-]?[0-9]+')


class LexerError(Exception):
    def __init__(self, message, line=0, column=0):
        super().__init__(message)
        self.line = line
        self.column = column


class Lexer:
    # =====================================================================
    # ORDER IS SEMANTIC: a closed quote must win over an unterminated one
    # =====================================================================
    TOKEN_SPECS = [
        ('WHITESPACE', r'\s+'),
        ('TEXT', r'"[^"\n]*"'),                 # "quoted text" stays one token
        ('UNTERMINATED', r'"[^"\n]*$'),         # opening quote with no partner
        ('WORD', r'[^\s"]+'),
    ]

    def __init__(self, source, filename="<input>"):
        self.source = source
        self.filename = filename
        self.lines = source.splitlines()
        self.line = 1
        self.column = 1

    @property
    def _regex(self):
        cls = self.__class__
        if '_MASTER_REGEX' not in cls.__dict__:
            pattern_parts = [f'(?P<{name}>{regex})' for name, regex in cls.TOKEN_SPECS]
            cls._MASTER_REGEX = re.compile('|'.join(pattern_parts))
        return cls._MASTER_REGEX

    def _get_context(self) -> str:
        """Extract the current source line and add a ^ pointer for error display."""
        if 0 <= self.line - 1 < len(self.lines):
            src_line = self.lines[self.line - 1]
            pointer = ' ' * (self.column - 1) + '^'
            return f"\n  {src_line}\n  {pointer}"
        return ""

    def error(self, message):
        context = self._get_context()
        raise LexerError(
            f"{self.filename}:{self.line}:{self.column}: {message}{context}",
            self.line, self.column,
        )

    def tokenize_line(self, number: int) -> List[str]:
        """Split source line `number` (1-based) into whitespace-separated tokens.

        Pieces that touch without whitespace between them are glued back into
        one token, so `"abc"def` stays a single (invalid) word.
        """
        self.line = number
        self.column = 1
        text = self.lines[number - 1] if 0 < number <= len(self.lines) else ""
        tokens: List[str] = []
        pos = 0
        glue = False
        while pos < len(text):
            match = self._regex.match(text, pos)
            kind = match.lastgroup
            value = match.group()
            self.column = pos + 1
            if kind == 'UNTERMINATED':
                self.error("Unterminated text: missing closing '\"'")
            pos = match.end()
            if kind == 'WHITESPACE':
                glue = False
                continue
            if glue:
                tokens[-1] += value
            else:
                tokens.append(value)
            glue = True
        return tokens

    def tokenize(self) -> List[List[str]]:
        return [self.tokenize_line(n) for n in range(1, len(self.lines) + 1)]


def split_program(program) -> List[str]:
    """Accept program text or an already split sequence of lines."""
    if isinstance(program, str):
        return program.splitlines()
    return list(program)


def tokenize(line: str) -> List[str]:
    return Lexer(line, "<line>").tokenize_line(1)


def is_integer(token: str) -> bool:
    """True for a signed 32-bit integer literal (no spaces, no underscores)."""
    if not _INTEGER.fullmatch(token):
        return False
    return INT32_MIN <= int(token) <= INT32_MAX


def has_invalid_word(word: str) -> bool:
    return any(reserved in word for reserved in RESERVED_WORDS)


def is_numeric(word: str) -> bool:
    try:
        float(word)
    except ValueError:
        return False
    return True


def is_valid_name(word: str) -> bool:
    return bool(word) and not is_numeric(word) and not has_invalid_word(word)


def wrap_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 2 ** 32 if value > INT32_MAX else value


def is_assignment_shape(parts: List[str]) -> bool:
    """`name = value [op value]` before any variable substitution."""
    return (3 <= len(parts) <= 5
            and is_valid_name(parts[0])
            and parts[1] == "=")


def is_call_shape(parts: List[str]) -> bool:
    """A single token of the form `name(args)`."""
    if len(parts) != 1:
        return False
    word = parts[0]
    return '(' in word and ')' in word and word.index('(') < word.index(')')


def split_call(word: str) -> Tuple[str, Optional[List[str]]]:
    """Split `name(a,b)` into ("name", ["a", "b"]).

    The argument list is None when the word is not well formed, i.e. it
    lacks brackets or the closing bracket is not its last character.
    """
    if '(' not in word or ')' not in word:
        return word.strip(), None
    open_index = word.index('(')
    close_index = word.index(')')
    name = word[:open_index].strip()
    if close_index != len(word) - 1 or close_index < open_index:
        return name, None
    inner = word[open_index + 1:close_index]
    if not inner.strip():
        return name, []
    return name, [arg.strip() for arg in inner.split(',')]
