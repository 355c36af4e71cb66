"""Reporters - one per output format."""

from nginx_route_check.actions.reporters.json_reporter import JsonReporter
from nginx_route_check.actions.reporters.plain_reporter import PlainReporter
from nginx_route_check.actions.reporters.rich_reporter import RichReporter

__all__ = ["JsonReporter", "PlainReporter", "RichReporter"]
