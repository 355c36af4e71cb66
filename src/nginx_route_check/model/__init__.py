"""Model package - Core data structures for nginx-route-check."""

from nginx_route_check.model.result import CheckReport, CheckResult
from nginx_route_check.model.server import Config, Location, MatchKind, Server
from nginx_route_check.model.statement import Block, Directive, Statement

__all__ = [
    "Block",
    "CheckReport",
    "CheckResult",
    "Config",
    "Directive",
    "Location",
    "MatchKind",
    "Server",
    "Statement",
]
