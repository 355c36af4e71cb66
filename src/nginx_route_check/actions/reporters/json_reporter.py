"""JSON Reporter Implementation."""

import json

from nginx_route_check.actions.reporters.base import BaseReporter
from nginx_route_check.model.result import CheckReport
from nginx_route_check.pipeline import ParsedConfig


class JsonReporter(BaseReporter):
    """Generates machine-readable JSON output."""

    def _dump(self, data: object) -> None:
        self.console.print(json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True)

    def report_check(self, report: CheckReport) -> int:
        """Report a routing check as JSON."""
        self._dump(report.to_dict())
        return 0 if report.result.matched else 1

    def report_servers(self, parsed: ParsedConfig) -> None:
        """Dump the routing model as JSON."""
        data = parsed.config.to_dict()
        data["warnings"] = list(parsed.warnings)
        self._dump(data)
