"""Generic statement tree produced by the parser.

A statement is either a plain Directive (``name args...;``) or a Block
(``name args... { body }``). Nothing here knows what a server or a
location is; that interpretation happens in the builder.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Directive:
    """A ``;``-terminated statement."""

    name: str
    args: list[str] = field(default_factory=list)
    line: int = 0  # line of the first word


@dataclass
class Block:
    """A statement followed by a ``{ ... }`` body."""

    name: str
    args: list[str] = field(default_factory=list)
    body: list["Statement"] = field(default_factory=list)
    line: int = 0


Statement = Directive | Block


def max_depth(statements: list[Statement]) -> int:
    """Deepest block nesting in the tree (0 for a flat list)."""
    depth = 0
    for statement in statements:
        if isinstance(statement, Block):
            depth = max(depth, 1 + max_depth(statement.body))
    return depth


def tree_to_dict(statements: list[Statement]) -> list[dict[str, Any]]:
    """Convert a statement tree into plain JSON/YAML friendly data."""
    data: list[dict[str, Any]] = []
    for statement in statements:
        item: dict[str, Any] = {
            "name": statement.name,
            "args": list(statement.args),
            "line": statement.line,
        }
        if isinstance(statement, Block):
            item["body"] = tree_to_dict(statement.body)
        data.append(item)
    return data
