"""Matching engine - which server and which location handle a URL.

Two phases, mirroring nginx:

1. Server selection by ``server_name``. Each name yields a score tuple:
   (4,) exact, (3, len) leading wildcard, (2, len) trailing wildcard,
   (1, order) regex. Higher first element wins; on a tie the larger
   second element wins, so longer wildcards and earlier servers win.
2. Location selection inside the chosen server: exact, then longest
   prefix, then regexes in declaration order.

Patterns are compiled fresh on every call; nothing is cached here.
"""

import logging
import re

from nginx_route_check.engine.target import TargetURL, parse_target_url
from nginx_route_check.errors import InvalidPatternError
from nginx_route_check.model.result import CheckResult
from nginx_route_check.model.server import Config, Location, MatchKind, Server

logger = logging.getLogger(__name__)

Score = tuple[int, ...]

EXACT_NAME = 4
LEADING_WILDCARD = 3
TRAILING_WILDCARD = 2
REGEX_NAME = 1


# PCRE named groups and backreferences, (?<name>...) and \k<name>
_PCRE_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?=[A-Za-z_])")
_PCRE_BACKREF = re.compile(r"\\k<([A-Za-z_]\w*)>")


def _to_python_regex(pattern: str) -> str:
    """Rewrite PCRE-only syntax used in nginx configs into ``re`` syntax.

    Lookbehinds ``(?<=`` and ``(?<!`` are left alone.
    """
    pattern = _PCRE_NAMED_GROUP.sub("(?P<", pattern)
    return _PCRE_BACKREF.sub(r"(?P=\1)", pattern)


def _compile(pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(_to_python_regex(pattern), flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def _leading_wildcard_match(name: str, hostname: str) -> bool:
    """``*.example.com`` style names."""
    return name.startswith("*") and hostname.endswith(name[1:])


def _trailing_wildcard_match(name: str, hostname: str) -> bool:
    """``www.example.*`` style names.

    Only the last two characters (".*") are stripped before comparing.
    """
    return name.endswith("*") and hostname.startswith(name[:-2])


def server_match(server: Server, target: TargetURL) -> list[Score]:
    """Score every server_name of a server against the target host."""
    hostname = target.hostname
    scores: list[Score] = []
    for name in server.server_names:
        if name.startswith("~"):
            if _compile(name[1:]).search(hostname):
                scores.append((REGEX_NAME, server.order))
        elif name == hostname:
            scores.append((EXACT_NAME,))
        elif _leading_wildcard_match(name, hostname):
            scores.append((LEADING_WILDCARD, len(name)))
        elif _trailing_wildcard_match(name, hostname):
            scores.append((TRAILING_WILDCARD, len(name)))
    return scores


def outranks(candidate: Score, best: Score) -> bool:
    """Whether ``candidate`` beats the current ``best`` score."""
    if candidate[0] != best[0]:
        return candidate[0] > best[0]
    return len(candidate) > 1 and len(best) > 1 and candidate[1] > best[1]


def select_server(config: Config, target: TargetURL) -> tuple[Server | None, Score | None]:
    """Pick the best scoring server, or (None, None) when no name matches."""
    best_server: Server | None = None
    best_score: Score = (0,)
    for server in config.servers:
        for score in server_match(server, target):
            if outranks(score, best_score):
                best_server, best_score = server, score
    if best_server is None:
        return None, None
    return best_server, best_score


def location_match(server: Server, target: TargetURL) -> tuple[Location | None, list[Location]]:
    """Select the location that handles the target path.

    Returns:
        Tuple of (selected location or None, every location examined).
    """
    path = target.path
    examined: list[Location] = []

    for location in server.locations:
        if location.kind is MatchKind.EXACT and location.path == path:
            examined.append(location)
            return location, examined

    best: Location | None = None
    for location in server.locations:
        if not location.kind.is_prefix or not path.startswith(location.path):
            continue
        examined.append(location)
        # Strictly longer only: the first of equal length is kept
        if best is None or len(location.path) > len(best.path):
            best = location

    # ^~ stops the search before regexes are tried
    if best is not None and best.kind is MatchKind.PREFIX_PRIORITY:
        return best, examined

    for location in server.locations:
        if not location.kind.is_regex:
            continue
        flags = re.IGNORECASE if location.kind is MatchKind.REGEX_NOCASE else 0
        if _compile(location.path, flags).search(path):
            examined.append(location)
            return location, examined

    return best, examined


def check_url(config: Config, url: str | TargetURL) -> CheckResult:
    """Run server selection then location selection for one URL.

    Raises:
        InvalidURLError: If ``url`` is a string that does not parse.
        InvalidPatternError: If a regex that had to be tried does not compile.
    """
    target = parse_target_url(url) if isinstance(url, str) else url

    if config.got_servers:
        server, score = select_server(config, target)
        if server is None:
            logger.debug("No server matched host %s", target.hostname)
            return CheckResult()
        logger.debug("Selected server %s with score %s", server, score)
    else:
        server, score = config.servers[0], None
        logger.debug("Only one server defined")

    location, examined = location_match(server, target)
    logger.debug("Selected location %s", location.path if location else None)
    return CheckResult(
        server=server,
        server_score=score,
        location=location.path if location else None,
        location_kind=location.kind if location else None,
        examined_locations=tuple(examined),
    )
