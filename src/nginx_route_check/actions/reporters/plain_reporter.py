"""Plain Text Reporter Implementation."""

from nginx_route_check.actions.reporters.base import BaseReporter
from nginx_route_check.model.result import CheckReport
from nginx_route_check.pipeline import ParsedConfig


class PlainReporter(BaseReporter):
    """Generates clean, text-only output."""

    def _out(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def report_check(self, report: CheckReport) -> int:
        """Report a routing check as plain text."""
        config = report.config
        result = report.result

        self._out("CONFIG")
        self._out(self.config_summary(config))
        if config.got_servers:
            for i, server in enumerate(config.servers, start=1):
                self._out(f"   {i}. {','.join(server.server_names)}")
        self._out()

        if report.warnings:
            self._out("CONFIG PROCESSING WARNINGS")
            for warning in report.warnings:
                self._out(f"   - {warning}")
            self._out()

        if config.got_servers:
            self._out("SERVER MATCH")
            if result.server:
                self._out(f"Matched server with names: {','.join(result.server.server_names)}.")
            else:
                self._out("Did not match any server.")
            self._out()

        if not result.matched:
            self._out("ERRORS")
            self._out("No locations matched")
            return 1

        self._out("LOCATIONS TRIED")
        for i, location in enumerate(result.examined_locations, start=1):
            self._out(f"   {i}. {location}")
        self._out()
        self._out("FINAL MATCH")
        self._out(f"Location: {result.location}")
        self._out(f"Match type: {result.location_kind.description}")
        return 0

    def report_servers(self, parsed: ParsedConfig) -> None:
        """List servers and their locations as plain text."""
        config = parsed.config
        self._out(self.config_summary(config))
        for server in config.servers:
            self._out()
            self._out(str(server))
            if server.index:
                self._out(f"   index: {' '.join(server.index)}")
            for location in server.locations:
                self._out(f"   line {location.line}: {location}")
        for warning in parsed.warnings:
            self._out(f"WARNING: {warning}")
