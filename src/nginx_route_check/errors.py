"""Exception hierarchy for nginx-route-check.

Shared by the parser, matcher, CLI and web layer so every module
raises and catches the same types. A request that simply matches
nothing is NOT an error; it is a regular CheckResult.
"""


class RouteCheckError(Exception):
    """Base for all nginx-route-check errors."""


class MalformedConfigError(RouteCheckError):
    """Raised when the configuration text cannot be turned into a tree.

    Covers unterminated quoted strings, unterminated blocks and a
    closing brace with no block to close.
    """

    def __init__(self, line: int, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: malformed configuration, {reason}")


class InvalidURLError(RouteCheckError):
    """Raised when the URL to test cannot be parsed."""

    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        message = f"Invalid URL, cannot test: {url!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidPatternError(RouteCheckError):
    """Raised when a regex server_name or location does not compile."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
