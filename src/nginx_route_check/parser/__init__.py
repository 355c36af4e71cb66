"""Parser package - Converts raw configuration text into structured models.

Parsers never read files - the caller hands them the text.
Most importantly, they track line numbers for every statement.
"""

from nginx_route_check.parser.builder import build_config
from nginx_route_check.parser.lexer import Lexer
from nginx_route_check.parser.nginx_conf import NginxConfigParser

__all__ = ["Lexer", "NginxConfigParser", "build_config"]
