"""Routing model dataclasses - what the matcher works on."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from nginx_route_check.model.statement import Statement


class MatchKind(Enum):
    """How a location path is compared against the request path."""

    EXACT = "exact"  # location = /path
    PREFIX = "prefix"  # location /path
    PREFIX_PRIORITY = "priority prefix"  # location ^~ /path
    REGEX = "case sensitive regex"  # location ~ pattern
    REGEX_NOCASE = "case insensitive regex"  # location ~* pattern

    @property
    def description(self) -> str:
        """Human readable label, e.g. 'priority prefix'."""
        return self.value

    @property
    def is_prefix(self) -> bool:
        return self in (MatchKind.PREFIX, MatchKind.PREFIX_PRIORITY)

    @property
    def is_regex(self) -> bool:
        return self in (MatchKind.REGEX, MatchKind.REGEX_NOCASE)


@dataclass
class Location:
    """Nginx location block.

    The body is kept as an uninterpreted statement list.
    """

    path: str  # /api, \.php$
    kind: MatchKind
    body: list[Statement] = field(default_factory=list)
    line: int = 0

    def __str__(self) -> str:
        return f"{self.kind.description} match for location: {self.path}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.name.lower(),
            "kind_description": self.kind.description,
            "line": self.line,
        }


@dataclass
class Server:
    """Nginx server block (virtual host).

    Attributes:
        order: Declaration priority. 1000 for the first server block,
            999 for the second and so on; 1 for the implicit server.
        root: Last ``root`` seen wins.
        index: All ``index`` arguments in declaration order.
        server_names: All ``server_name`` arguments in declaration order.
            May hold wildcards (``*.example.com``, ``www.example.*``)
            or regexes (``~^api\\d+``).
        locations: Locations in declaration order.
        line: Line of the ``server`` keyword, 0 for the implicit server.
    """

    order: int
    root: str | None = None
    index: list[str] = field(default_factory=list)
    server_names: list[str] = field(default_factory=list)
    locations: list[Location] = field(default_factory=list)
    line: int = 0

    def __str__(self) -> str:
        names = ",".join(self.server_names)
        return f"[Server name: {names} root: {self.root} locations: {len(self.locations)}]"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation (location bodies omitted)."""
        return {
            "server_names": list(self.server_names),
            "root": self.root,
            "index": list(self.index),
            "order": self.order,
            "line": self.line,
            "locations": [location.to_dict() for location in self.locations],
        }


@dataclass
class Config:
    """Routing view of a whole configuration document."""

    got_servers: bool = False
    servers: list[Server] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + "".join(f"{server}, " for server in self.servers) + "]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "got_servers": self.got_servers,
            "servers": [server.to_dict() for server in self.servers],
        }
