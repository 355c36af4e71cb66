"""Report Action - Present routing checks and parsed configurations.

CONTRACT:
- read_only: True
- requires_backup: False
- rollback_support: N/A
- prerequisites: None
"""

import json
from dataclasses import dataclass

import yaml
from rich.console import Console

from nginx_route_check.actions.reporters.base import BaseReporter
from nginx_route_check.actions.reporters.json_reporter import JsonReporter
from nginx_route_check.actions.reporters.plain_reporter import PlainReporter
from nginx_route_check.actions.reporters.rich_reporter import RichReporter
from nginx_route_check.model.result import CheckReport
from nginx_route_check.model.statement import max_depth, tree_to_dict
from nginx_route_check.pipeline import ParsedConfig

REPORTERS: dict[str, type[BaseReporter]] = {
    "rich": RichReporter,
    "plain": PlainReporter,
    "json": JsonReporter,
}


@dataclass
class ActionContract:
    """Explicit contract for an action."""

    read_only: bool
    requires_backup: bool
    rollback_support: bool
    prerequisites: list[str]


class ReportAction:
    """Present check results and parsed configurations.

    This action is completely read-only and produces
    formatted output for the terminal.
    """

    CONTRACT = ActionContract(
        read_only=True,
        requires_backup=False,
        rollback_support=False,
        prerequisites=[],
    )

    def __init__(self, console: Console | None = None, format_mode: str | None = None) -> None:
        self.console = console or Console()
        self.format_mode = format_mode or "rich"
        if self.format_mode not in REPORTERS:
            raise ValueError(f"Unknown output format: {self.format_mode}")
        self.reporter = REPORTERS[self.format_mode](self.console)

    def report_check(self, report: CheckReport) -> int:
        """Print a check report. Returns the process exit code."""
        return self.reporter.report_check(report)

    def report_servers(self, parsed: ParsedConfig) -> None:
        """Print the routing model."""
        self.reporter.report_servers(parsed)

    def export_tree(self, parsed: ParsedConfig, format: str) -> None:
        """Export the generic statement tree to JSON or YAML."""
        data = {
            "statements": tree_to_dict(parsed.statements),
            "max_depth": max_depth(parsed.statements),
            "warnings": list(parsed.warnings),
        }

        if format == "json":
            text = json.dumps(data, indent=2)
        elif format == "yaml":
            text = yaml.safe_dump(data, sort_keys=False)
        else:
            raise ValueError(f"Unknown export format: {format}")
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)
