"""Routing model builder.

Projects the generic statement tree onto Config / Server / Location.
Only routing-relevant directives are looked at; everything else is
silently ignored.
"""

from nginx_route_check.model.server import Config, Location, MatchKind, Server
from nginx_route_check.model.statement import Block, Statement

# Order handed to the first server block; each following one gets one less
FIRST_SERVER_ORDER = 1000
IMPLICIT_SERVER_ORDER = 1

LOCATION_MODIFIERS = {
    "=": MatchKind.EXACT,
    "~": MatchKind.REGEX,
    "~*": MatchKind.REGEX_NOCASE,
    "^~": MatchKind.PREFIX_PRIORITY,
}


def build_config(statements: list[Statement]) -> Config:
    """Build the routing model for a parsed document.

    The body of the first ``http`` block is used as the working scope when
    there is one. Every ``server`` block in that scope becomes a Server.
    Without any server block the top-level statements are treated as a
    single implicit server and ``got_servers`` stays False. Statements
    nested in ``http`` are not part of that implicit server.
    """
    scope = statements
    for statement in statements:
        if isinstance(statement, Block) and statement.name == "http":
            scope = statement.body
            break

    servers: list[Server] = []
    order = FIRST_SERVER_ORDER
    for statement in scope:
        if isinstance(statement, Block) and statement.name == "server":
            servers.append(build_server(statement.body, order, line=statement.line))
            order -= 1

    if servers:
        return Config(got_servers=True, servers=servers)
    return Config(got_servers=False, servers=[build_server(statements, IMPLICIT_SERVER_ORDER)])


def build_server(statements: list[Statement], order: int, line: int = 0) -> Server:
    """Populate a Server from the statements of one server scope."""
    server = Server(order=order, line=line)
    for statement in statements:
        name = statement.name
        if name == "root":
            if statement.args:
                server.root = statement.args[0]
        elif name == "server_name":
            server.server_names.extend(statement.args)
        elif name == "index":
            server.index.extend(statement.args)
        elif name == "location":
            body = statement.body if isinstance(statement, Block) else []
            location = build_location(statement.args, body, line=statement.line)
            if location is not None:
                server.locations.append(location)
    return server


def build_location(args: list[str], body: list[Statement], line: int = 0) -> Location | None:
    """Classify a location by its modifier.

    ``location = /x``, ``~``, ``~*`` and ``^~`` take the path from the
    second argument; otherwise the first argument is a plain prefix.

    Returns:
        The Location, or None when no path was given.
    """
    if not args:
        return None
    kind = LOCATION_MODIFIERS.get(args[0])
    if kind is None:
        return Location(path=args[0], kind=MatchKind.PREFIX, body=body, line=line)
    if len(args) < 2:
        return None
    return Location(path=args[1], kind=kind, body=body, line=line)
