"""Shared parse + check pipeline.

Used by both the CLI and the web API so they behave the same.
Public API:
    load_config(text) -> ParsedConfig
    run_check(text, url) -> CheckReport
"""

from dataclasses import dataclass, field

from nginx_route_check.engine.matcher import check_url
from nginx_route_check.model.result import CheckReport
from nginx_route_check.model.server import Config
from nginx_route_check.model.statement import Statement
from nginx_route_check.parser.builder import build_config
from nginx_route_check.parser.nginx_conf import NginxConfigParser


@dataclass
class ParsedConfig:
    """Result from load_config()."""

    statements: list[Statement]
    config: Config
    warnings: list[str] = field(default_factory=list)


def load_config(text: str) -> ParsedConfig:
    """Parse configuration text and build its routing model.

    Raises:
        MalformedConfigError: If the text cannot be parsed.
    """
    parser = NginxConfigParser()
    statements = parser.parse(text)
    return ParsedConfig(
        statements=statements,
        config=build_config(statements),
        warnings=list(parser.warnings),
    )


def run_check(text: str, url: str) -> CheckReport:
    """Answer "which server and location would handle this URL?".

    Args:
        text: Configuration text, already loaded by the caller.
        url: Full URL to test, e.g. ``http://example.com/images/a.png``.

    Raises:
        MalformedConfigError: If the configuration cannot be parsed.
        InvalidURLError: If the URL cannot be parsed.
        InvalidPatternError: If a regex needed for the decision is invalid.
    """
    parsed = load_config(text)
    result = check_url(parsed.config, url)
    return CheckReport(
        url=url,
        config=parsed.config,
        result=result,
        warnings=tuple(parsed.warnings),
    )
