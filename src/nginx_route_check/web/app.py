"""
FastAPI Application for nginx-route-check.

Runs on localhost only (127.0.0.1).
Exposes the check pipeline as a small JSON API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nginx_route_check import __version__
from nginx_route_check.web.routes import check


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="nginx-route-check",
        description="Offline nginx server and location matching",
        version=__version__,
        docs_url="/api/docs",
        redoc_url=None,
    )

    # CORS - restrict to localhost only
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"http://(127\.0\.0\.1|localhost)(:\d+)?",
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(check.router, prefix="/api", tags=["check"])

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    return app


def run_server(host: str = "127.0.0.1", port: int = 8765) -> None:
    """Run the FastAPI server with uvicorn.

    Args:
        host: Bind address. MUST be 127.0.0.1.
        port: Port to listen on.
    """
    import uvicorn

    if host != "127.0.0.1":
        print("Forcing bind to 127.0.0.1 (localhost only)")
        host = "127.0.0.1"

    print(f"Starting nginx-route-check API at http://{host}:{port}/api/docs")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")
