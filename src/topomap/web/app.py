"""FastAPI application exposing the layout engine.

The diagram editor posts its current nodes and edges and gets back
positioned nodes (and, for the CIDR tree, merged edges). The API keeps
no state between requests.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from topomap import __version__
from topomap.errors import LayoutError, TopomapError
from topomap.web.deps import limiter
from topomap.web.routes import hierarchy, layout

logger = logging.getLogger(__name__)


def create_app(rate_limit_enabled: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        rate_limit_enabled: Whether to enable rate limiting (disable for tests)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Topomap",
        description="Network asset topology layout and CIDR hierarchy API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    if rate_limit_enabled:
        app_limiter = limiter
    else:
        app_limiter = Limiter(key_func=get_remote_address, enabled=False)
    app.state.limiter = app_limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.include_router(layout.router, prefix="/api", tags=["layout"])
    app.include_router(hierarchy.router, prefix="/api", tags=["hierarchy"])

    @app.exception_handler(TopomapError)
    async def topomap_error_handler(request: Request, exc: TopomapError):
        code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if isinstance(exc, LayoutError)
            else status.HTTP_400_BAD_REQUEST
        )
        logger.warning("Request to %s failed: %s", request.url.path, exc)
        return JSONResponse(
            status_code=code,
            content={"detail": exc.message, "details": exc.details},
        )

    @app.get("/health")
    async def health():
        """Liveness probe."""
        return {"status": "ok", "version": __version__}

    return app
