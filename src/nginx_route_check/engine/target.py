"""Request target - the parts of a URL the matcher looks at."""

from dataclasses import dataclass
from urllib.parse import urlsplit

from nginx_route_check.errors import InvalidURLError


@dataclass(frozen=True)
class TargetURL:
    """Decomposed request URL."""

    scheme: str
    hostname: str  # lower-cased
    path: str  # never empty, "/" at minimum, dot segments resolved


def remove_dot_segments(path: str) -> str:
    """Resolve "." and ".." path segments the way a browser does.

    Empty segments are kept, so "//a" stays "//a". A path ending in a
    dot segment keeps a trailing slash.
    """
    segments = path.split("/")
    output: list[str] = []
    for segment in segments[1:]:
        if segment == "..":
            if output:
                output.pop()
        elif segment != ".":
            output.append(segment)
    if segments[-1] in (".", ".."):
        output.append("")
    return "/" + "/".join(output)


def parse_target_url(url: str) -> TargetURL:
    """Split a URL into scheme, hostname and path.

    Raises:
        InvalidURLError: If the URL does not parse or lacks a scheme or host.
    """
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
        parts.port  # raises ValueError on a bad port
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if not parts.scheme:
        raise InvalidURLError(url, "missing scheme")
    if not hostname:
        raise InvalidURLError(url, "missing host")

    return TargetURL(
        scheme=parts.scheme.lower(),
        hostname=hostname,
        path=remove_dot_segments(parts.path or "/"),
    )
