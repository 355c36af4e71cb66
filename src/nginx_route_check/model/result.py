"""Check result dataclasses - the output contract of a routing check."""

from dataclasses import dataclass
from typing import Any

from nginx_route_check.model.server import Config, Location, MatchKind, Server


@dataclass(frozen=True)
class CheckResult:
    """Outcome of matching one URL against one Config.

    Every field is empty when no server matched. ``examined_locations``
    lists every location that was considered, chosen or not, in the
    order they were examined.
    """

    server: Server | None = None
    server_score: tuple[int, ...] | None = None
    location: str | None = None
    location_kind: MatchKind | None = None
    examined_locations: tuple[Location, ...] = ()

    @property
    def matched(self) -> bool:
        """True when a location was selected."""
        return self.location is not None


@dataclass(frozen=True)
class CheckReport:
    """A CheckResult together with what is needed to explain it."""

    url: str
    config: Config
    result: CheckResult
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        result = self.result
        kind = result.location_kind
        return {
            "url": self.url,
            "got_servers": self.config.got_servers,
            "servers": [list(server.server_names) for server in self.config.servers],
            "warnings": list(self.warnings),
            "server": result.server.to_dict() if result.server else None,
            "server_score": list(result.server_score) if result.server_score else None,
            "location": result.location,
            "location_kind": kind.name.lower() if kind else None,
            "location_kind_description": kind.description if kind else None,
            "examined_locations": [location.to_dict() for location in result.examined_locations],
            "matched": result.matched,
        }
