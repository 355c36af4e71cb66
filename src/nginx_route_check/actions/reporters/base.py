"""Base Reporter Interface."""

from abc import ABC, abstractmethod

from rich.console import Console

from nginx_route_check.model.result import CheckReport
from nginx_route_check.model.server import Config
from nginx_route_check.pipeline import ParsedConfig


class BaseReporter(ABC):
    """Abstract base class for all check reporters."""

    def __init__(self, console: Console) -> None:
        self.console = console

    @abstractmethod
    def report_check(self, report: CheckReport) -> int:
        """Report a routing check. Returns 0 if a location matched, else 1."""
        pass

    @abstractmethod
    def report_servers(self, parsed: ParsedConfig) -> None:
        """Describe the routing model of a configuration."""
        pass

    @staticmethod
    def config_summary(config: Config) -> str:
        """One-line description of how servers will be selected."""
        if config.got_servers:
            return (
                f"Found {len(config.servers)} server(s) defined. "
                "Attempted server name matching."
            )
        return "No server blocks found. Will match only on path component."
