"""Engine package - Server and location selection."""

from nginx_route_check.engine.matcher import check_url, location_match, server_match
from nginx_route_check.engine.target import TargetURL, parse_target_url, remove_dot_segments

__all__ = [
    "TargetURL",
    "check_url",
    "location_match",
    "parse_target_url",
    "remove_dot_segments",
    "server_match",
]
