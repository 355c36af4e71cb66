"""Nginx Configuration Parser.

Builds a generic statement tree from configuration text.

IMPORTANT DESIGN NOTES:
1. One call of _parse_block per nesting level, all sharing one Lexer
2. `include` is never resolved - no files are ever opened. Each one
   becomes a warning and is dropped from the tree
3. Line numbers point at the first word of each statement
"""

import logging

from nginx_route_check.errors import MalformedConfigError
from nginx_route_check.model.statement import Block, Directive, Statement
from nginx_route_check.parser.lexer import Lexer, TokenKind

logger = logging.getLogger(__name__)


class NginxConfigParser:
    """Parser for a single nginx configuration document.

    Warnings collected during the last parse() are kept in ``warnings``
    as ``"line <n>: <message>"`` strings.
    """

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def parse(self, text: str) -> list[Statement]:
        """Parse configuration text into a statement tree.

        Args:
            text: Full configuration text.

        Returns:
            Top-level statements in declaration order.

        Raises:
            MalformedConfigError: On an unterminated string or block, or
                a closing brace without an open block.
        """
        self.warnings = []
        return self._parse_block(Lexer(text), depth=0, opened_at=0)

    def _parse_block(self, lexer: Lexer, depth: int, opened_at: int) -> list[Statement]:
        """Parse statements until the end of the current nesting level.

        Args:
            lexer: Shared token source.
            depth: 0 for the document, +1 per enclosing block.
            opened_at: Line of the block being parsed (for error messages).
        """
        statements: list[Statement] = []
        words: list[str] = []
        line = 0

        while True:
            token = lexer.next_token()

            if token.kind is TokenKind.VALUE:
                if not words:
                    line = token.line
                words.append(token.value)

            elif token.kind is TokenKind.BEGIN_BLOCK:
                block_line = line or token.line
                body = self._parse_block(lexer, depth + 1, block_line)
                name, args = (words[0], words[1:]) if words else ("", [])
                if name == "include":
                    self._skip_include(args, block_line)
                else:
                    statements.append(Block(name=name, args=args, body=body, line=block_line))
                words, line = [], 0

            elif token.kind is TokenKind.END_OF_STATEMENT:
                self._finish_statement(statements, words, line)
                words, line = [], 0

            elif token.kind is TokenKind.END_BLOCK:
                if depth == 0:
                    raise MalformedConfigError(token.line, "unexpected '}' with no open block")
                self._finish_statement(statements, words, line)
                return statements

            else:  # END_DOCUMENT
                if depth > 0:
                    raise MalformedConfigError(opened_at, "block is never closed")
                self._finish_statement(statements, words, line)
                return statements

    def _finish_statement(self, statements: list[Statement], words: list[str], line: int) -> None:
        """Append the pending words as a Directive (or drop an include)."""
        if not words:
            return
        if words[0] == "include":
            self._skip_include(words[1:], line)
            return
        statements.append(Directive(name=words[0], args=words[1:], line=line))

    def _skip_include(self, args: list[str], line: int) -> None:
        target = args[0] if args else ""
        message = f"line {line}: no files available, didn't include {target}"
        logger.warning(message)
        self.warnings.append(message)
