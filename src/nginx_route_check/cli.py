"""
Click-based CLI for nginx-route-check.

IMPORTANT: This module only ORCHESTRATES. It never matches or decides.
- Resolves profiles and reads configuration files
- Invokes the pipeline
- Formats output
"""

import logging
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from nginx_route_check import __version__
from nginx_route_check.actions.report import ReportAction
from nginx_route_check.config import ConfigManager
from nginx_route_check.errors import RouteCheckError
from nginx_route_check.pipeline import ParsedConfig, load_config, run_check

console = Console()

# Exit status when no result could be produced at all
EXIT_ERROR = 2


@click.group()
@click.version_option(version=__version__, prog_name="nginx-route-check")
@click.option("--config", "-c", type=click.Path(), help="Path to config directory")
@click.option("--verbose", "-v", is_flag=True, help="Log every matching decision")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """nginx-route-check: Which server and location handle this URL?

    Parses an nginx configuration offline and replays nginx's virtual host
    and location selection for a URL.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    config_dir = Path(config) if config else None
    ctx.obj["config_mgr"] = ConfigManager(config_dir)


def _fail(ctx: click.Context, message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/] {escape(message)}")
    ctx.exit(EXIT_ERROR)


def _read_config(ctx: click.Context, source: str) -> tuple[str, str | None]:
    """Resolve CONFIG to (text, default URL).

    CONFIG is a profile name, ``-`` for stdin, or a file path.
    """
    config_mgr = ctx.obj["config_mgr"]
    profile = config_mgr.get_profile(source)
    if profile:
        path, default_url = profile.path, profile.url
    elif source == "-":
        return click.get_text_stream("stdin").read(), None
    else:
        path, default_url = source, None

    try:
        return Path(path).read_text(encoding="utf-8"), default_url
    except OSError as e:
        _fail(ctx, f"Cannot read configuration {path}: {e.strerror or e}")


def _load(ctx: click.Context, source: str) -> ParsedConfig:
    text, _ = _read_config(ctx, source)
    try:
        return load_config(text)
    except RouteCheckError as e:
        _fail(ctx, str(e))


@main.command()
@click.argument("config_source", metavar="CONFIG")
@click.argument("url", required=False)
@click.option("--format", "fmt", type=click.Choice(["rich", "plain", "json"]), default="rich", help="Output format")
@click.pass_context
def check(ctx: click.Context, config_source: str, url: str | None, fmt: str) -> None:
    """Show which server and location would handle URL.

    Exits 0 when a location matched, 1 when nothing matched and 2 when
    the configuration or the URL is invalid.
    """
    text, default_url = _read_config(ctx, config_source)
    url = url or default_url
    if not url:
        _fail(ctx, "No URL given and the profile has no default URL.")

    try:
        report = run_check(text, url)
    except RouteCheckError as e:
        _fail(ctx, str(e))

    reporter = ReportAction(console, format_mode=fmt)
    ctx.exit(reporter.report_check(report))


@main.command()
@click.argument("config_source", metavar="CONFIG")
@click.option("--json", "output_format", flag_value="json", default=True, help="Output as JSON")
@click.option("--yaml", "output_format", flag_value="yaml", help="Output as YAML")
@click.pass_context
def tree(ctx: click.Context, config_source: str, output_format: str) -> None:
    """Dump the parsed statement tree of CONFIG.

    Includes are never followed; each one shows up as a warning.
    """
    parsed = _load(ctx, config_source)
    ReportAction(console).export_tree(parsed, output_format)


@main.command()
@click.argument("config_source", metavar="CONFIG")
@click.option("--format", "fmt", type=click.Choice(["rich", "plain", "json"]), default="rich", help="Output format")
@click.pass_context
def servers(ctx: click.Context, config_source: str, fmt: str) -> None:
    """List servers and locations as nginx-route-check sees them."""
    parsed = _load(ctx, config_source)
    ReportAction(console, format_mode=fmt).report_servers(parsed)


@main.command()
@click.option("--port", "-p", default=8765, help="Port to listen on (always bound to 127.0.0.1)")
def web(port: int) -> None:
    """Serve the JSON check API locally."""
    from nginx_route_check.web.app import run_server

    run_server(port=port)


@main.group()
def config() -> None:
    """Manage configuration file profiles."""
    pass


@config.command("add")
@click.argument("name")
@click.option("--file", "-f", "file_path", type=click.Path(exists=True, dir_okay=False), required=True, help="nginx configuration file")
@click.option("--url", "-u", help="Default URL to check")
@click.pass_context
def config_add(ctx: click.Context, name: str, file_path: str, url: str | None) -> None:
    """Add a new configuration profile."""
    config_mgr = ctx.obj["config_mgr"]
    profile = config_mgr.add_profile(name, file_path, url=url)
    console.print(f"[bold green]✓ Added profile:[/] {escape(name)} -> {escape(profile.path)}")


@config.command("list")
@click.pass_context
def config_list(ctx: click.Context) -> None:
    """List all configuration profiles."""
    config_mgr = ctx.obj["config_mgr"]
    profiles = config_mgr.list_profiles()
    if not profiles:
        console.print("[dim]No profiles configured yet.[/]")
        return

    for name, data in profiles.items():
        line = f"[bold green]{escape(name)}[/]: {escape(data['path'])}"
        if data.get("url"):
            line += f" [dim]({escape(data['url'])})[/]"
        console.print(line)


@config.command("remove")
@click.argument("name")
@click.pass_context
def config_remove(ctx: click.Context, name: str) -> None:
    """Remove a configuration profile."""
    config_mgr = ctx.obj["config_mgr"]
    if config_mgr.remove_profile(name):
        console.print(f"[bold green]✓ Removed profile:[/] {escape(name)}")
    else:
        _fail(ctx, f"Profile {name} not found.")


if __name__ == "__main__":
    main()
