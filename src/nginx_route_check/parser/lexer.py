"""Nginx configuration lexer.

Turns raw configuration text into a stream of line-numbered tokens.
The lexer is a small state machine that is *pulled* one token at a time,
so every nesting level of the parser can share the same cursor.

IMPORTANT QUIRKS:
1. Inside a quoted string only ``\\n`` is special. Any other escaped
   character is kept verbatim and the backslash is dropped.
2. A bareword ends at whitespace, ``;``, ``{`` or ``#`` but NOT at ``}``.
3. A ``;`` or ``{`` that ends a bareword is replayed on the next call.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from nginx_route_check.errors import MalformedConfigError


class LexerState(Enum):
    """Scanner state between two characters."""

    SKIP = auto()  # between tokens
    IN_STRING = auto()  # inside "..."
    QUOTED = auto()  # right after a backslash inside "..."
    TOKEN = auto()  # accumulating a bareword
    COMMENT = auto()  # from '#' to end of line
    STATEMENT_END = auto()  # ';' pending, emitted on next call
    BEGIN_BLOCK = auto()  # '{' pending, emitted on next call


class TokenKind(Enum):
    """Kinds of tokens handed to the parser."""

    VALUE = auto()
    END_OF_STATEMENT = auto()
    BEGIN_BLOCK = auto()
    END_BLOCK = auto()
    END_DOCUMENT = auto()


@dataclass(frozen=True)
class Token:
    """A single token with the line it was found on."""

    kind: TokenKind
    line: int
    value: str | None = None

    def __repr__(self) -> str:
        if self.kind is TokenKind.VALUE:
            return f"Token({self.value!r}, L{self.line})"
        return f"Token({self.kind.name}, L{self.line})"


WHITESPACE = frozenset(" \t\r\n")


class Lexer:
    """Tokenizer for nginx configuration text.

    Usage:
        lexer = Lexer(text)
        token = lexer.next_token()      # pull-style, used by the parser
        tokens = list(lexer.tokenize())  # or everything at once
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.position = 0
        self.line = 1
        self.state = LexerState.SKIP
        self._buffer = ""
        self._buffer_line = 1

    def _next_char(self) -> str | None:
        """Consume one character, counting newlines wherever they appear."""
        if self.position >= len(self.source):
            return None
        ch = self.source[self.position]
        self.position += 1
        if ch == "\n":
            self.line += 1
        return ch

    def _value(self) -> Token:
        return Token(TokenKind.VALUE, self._buffer_line, self._buffer)

    def next_token(self) -> Token:
        """Return the next token, END_DOCUMENT once the input is exhausted."""
        # Terminator buffered by the previous call
        if self.state is LexerState.STATEMENT_END:
            self.state = LexerState.SKIP
            return Token(TokenKind.END_OF_STATEMENT, self.line)
        if self.state is LexerState.BEGIN_BLOCK:
            self.state = LexerState.SKIP
            return Token(TokenKind.BEGIN_BLOCK, self.line)

        while True:
            ch = self._next_char()
            if ch is None:
                return self._end_of_input()

            if self.state is LexerState.SKIP:
                token = self._in_skip(ch)
            elif self.state is LexerState.COMMENT:
                if ch == "\n":
                    self.state = LexerState.SKIP
                token = None
            elif self.state is LexerState.TOKEN:
                token = self._in_token(ch)
            elif self.state is LexerState.IN_STRING:
                token = self._in_string(ch)
            elif self.state is LexerState.QUOTED:
                self._buffer += "\n" if ch == "n" else ch
                self.state = LexerState.IN_STRING
                token = None
            else:
                raise AssertionError(f"unexpected lexer state {self.state}")

            if token is not None:
                return token

    def _in_skip(self, ch: str) -> Token | None:
        if ch in WHITESPACE:
            return None
        if ch == ";":
            return Token(TokenKind.END_OF_STATEMENT, self.line)
        if ch == "{":
            return Token(TokenKind.BEGIN_BLOCK, self.line)
        if ch == "}":
            return Token(TokenKind.END_BLOCK, self.line)
        if ch == "#":
            self.state = LexerState.COMMENT
            return None
        if ch == '"':
            self.state = LexerState.IN_STRING
            self._buffer = ""
            self._buffer_line = self.line
            return None
        self.state = LexerState.TOKEN
        self._buffer = ch
        self._buffer_line = self.line
        return None

    def _in_token(self, ch: str) -> Token | None:
        if ch in WHITESPACE:
            self.state = LexerState.SKIP
        elif ch == ";":
            self.state = LexerState.STATEMENT_END
        elif ch == "{":
            self.state = LexerState.BEGIN_BLOCK
        elif ch == "#":
            self.state = LexerState.COMMENT
        else:
            self._buffer += ch
            return None
        return self._value()

    def _in_string(self, ch: str) -> Token | None:
        if ch == "\\":
            self.state = LexerState.QUOTED
            return None
        if ch == '"':
            self.state = LexerState.SKIP
            return self._value()
        self._buffer += ch
        return None

    def _end_of_input(self) -> Token:
        if self.state in (LexerState.IN_STRING, LexerState.QUOTED):
            raise MalformedConfigError(self._buffer_line, "unterminated quoted string")
        # A bareword still being accumulated is dropped here
        return Token(TokenKind.END_DOCUMENT, self.line)

    def tokenize(self) -> Iterator[Token]:
        """Yield every token up to and including END_DOCUMENT."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END_DOCUMENT:
                return
