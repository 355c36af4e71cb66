"""
Check API routes.

Endpoints:
- POST /api/check - Which server and location handle a URL
- POST /api/parse - Statement tree and routing model of a configuration
"""

from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from nginx_route_check.errors import InvalidURLError, RouteCheckError
from nginx_route_check.model.statement import max_depth, tree_to_dict
from nginx_route_check.pipeline import load_config, run_check

router = APIRouter()


class CheckRequest(BaseModel):
    """Routing check request."""
    config: str = Field(..., description="Full nginx configuration text")
    url: str = Field(..., description="URL to test, e.g. http://example.com/images/a.png")


class ExaminedLocation(BaseModel):
    """A location considered during matching."""
    path: str
    kind: str
    kind_description: str
    line: int


class CheckResponse(BaseModel):
    """Routing check result."""
    got_servers: bool
    server_names: Optional[List[str]] = None
    server_score: Optional[List[int]] = None
    location: Optional[str] = None
    location_kind: Optional[str] = None
    location_kind_description: Optional[str] = None
    examined_locations: List[ExaminedLocation] = []
    warnings: List[str] = []
    matched: bool


class ParseRequest(BaseModel):
    """Parse request."""
    config: str = Field(..., description="Full nginx configuration text")


class ParseResponse(BaseModel):
    """Parsed configuration."""
    tree: List[Any]
    max_depth: int
    servers: List[Any]
    got_servers: bool
    warnings: List[str] = []


@router.post("/check", response_model=CheckResponse)
async def check(request: CheckRequest) -> CheckResponse:
    """Replay server and location selection for one URL."""
    try:
        report = run_check(request.config, request.url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RouteCheckError as e:
        raise HTTPException(status_code=422, detail=str(e))

    data = report.to_dict()
    server = data["server"]
    return CheckResponse(
        got_servers=data["got_servers"],
        server_names=server["server_names"] if server else None,
        server_score=data["server_score"],
        location=data["location"],
        location_kind=data["location_kind"],
        location_kind_description=data["location_kind_description"],
        examined_locations=[ExaminedLocation(**loc) for loc in data["examined_locations"]],
        warnings=data["warnings"],
        matched=data["matched"],
    )


@router.post("/parse", response_model=ParseResponse)
async def parse(request: ParseRequest) -> ParseResponse:
    """Parse a configuration without matching anything."""
    try:
        parsed = load_config(request.config)
    except RouteCheckError as e:
        raise HTTPException(status_code=422, detail=str(e))

    model = parsed.config.to_dict()
    return ParseResponse(
        tree=tree_to_dict(parsed.statements),
        max_depth=max_depth(parsed.statements),
        servers=model["servers"],
        got_servers=model["got_servers"],
        warnings=parsed.warnings,
    )
