"""Rich Reporter Implementation."""

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from nginx_route_check.actions.reporters.base import BaseReporter
from nginx_route_check.model.result import CheckReport
from nginx_route_check.pipeline import ParsedConfig


class RichReporter(BaseReporter):
    """Generates high-fidelity terminal output using Rich."""

    def report_check(self, report: CheckReport) -> int:
        """Report a routing check with panels and tables."""
        config = report.config
        result = report.result

        self.console.print()
        self.console.print(Panel.fit("Config", style="bold cyan"))
        self.console.print(f"   {self.config_summary(config)}")
        if config.got_servers:
            for i, server in enumerate(config.servers, start=1):
                self.console.print(f"   {i}. {escape(', '.join(server.server_names)) or '[dim]-[/]'}")

        if report.warnings:
            self.console.print()
            self.console.print(Panel.fit("Config processing warnings", style="bold red"))
            for warning in report.warnings:
                self.console.print(f"   [red]![/] {escape(warning)}")

        if config.got_servers:
            self.console.print()
            self.console.print(Panel.fit("Server match", style="bold cyan"))
            if result.server:
                names = escape(", ".join(result.server.server_names))
                self.console.print(f"   Matched server with names: [bold]{names}[/].")
                self.console.print(f"   [dim]Score: {result.server_score}[/]")
            else:
                self.console.print("   [yellow]Did not match any server.[/]")

        self.console.print()
        if not result.matched:
            self.console.print(Panel.fit("No locations matched", style="bold red"))
            return 1

        table = Table(show_header=True, title="Locations tried", title_justify="left")
        table.add_column("#", justify="right")
        table.add_column("Match type")
        table.add_column("Location")
        table.add_column("Line", justify="right")
        for i, location in enumerate(result.examined_locations, start=1):
            table.add_row(str(i), location.kind.description, escape(location.path), str(location.line))
        self.console.print(table)

        self.console.print()
        self.console.print(
            Panel(
                f"Location: [bold]{escape(result.location)}[/]\n"
                f"Match type: {result.location_kind.description}",
                title="[bold white]Final match[/]",
                title_align="left",
                border_style="green",
                padding=(1, 2),
            )
        )
        return 0

    def report_servers(self, parsed: ParsedConfig) -> None:
        """Display every server with its names and locations."""
        config = parsed.config
        self.console.print()
        self.console.print(Panel.fit(self.config_summary(config), style="bold cyan"))

        for server in config.servers:
            self.console.print()
            title = ", ".join(server.server_names) or "(no server_name)"
            self.console.print(f"[bold green]{escape(title)}[/]  [dim]order={server.order} line={server.line}[/]")
            self.console.print(f"   root: {escape(server.root or '-')}")
            if server.index:
                self.console.print(f"   index: {escape(' '.join(server.index))}")
            if not server.locations:
                self.console.print("   [dim]No locations defined.[/]")
                continue
            table = Table(show_header=True)
            table.add_column("Line", justify="right")
            table.add_column("Match type")
            table.add_column("Location")
            for location in server.locations:
                table.add_row(str(location.line), location.kind.description, escape(location.path))
            self.console.print(table)

        if parsed.warnings:
            self.console.print()
            for warning in parsed.warnings:
                self.console.print(f"[red]![/] {escape(warning)}")
