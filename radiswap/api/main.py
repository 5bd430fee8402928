"""FastAPI application for Radiswap pools.

Note: every mutating endpoint runs inside Ledger.transaction(), so a
rejected request leaves balances, supplies and registrations untouched.
"""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from radiswap import __version__
from radiswap.api.endpoints import router
from radiswap.config import ServiceSettings
from radiswap.errors import (
    InsufficientBalance,
    RadiswapError,
    UnknownAccount,
    UnknownComponent,
    UnknownResource,
)
from radiswap.models.pool import ErrorResponse

logger = structlog.get_logger()

SETTINGS = ServiceSettings.from_env()

app = FastAPI(
    title="Radiswap",
    description="Two-asset constant product liquidity pools on an in-memory ledger",
    version=__version__,
)

app.include_router(router)


def status_for(error: RadiswapError) -> int:
    """HTTP status code for a pool or ledger error."""
    if isinstance(error, (UnknownAccount, UnknownComponent, UnknownResource)):
        return 404
    if isinstance(error, InsufficientBalance):
        return 409
    return 400


@app.exception_handler(RadiswapError)
async def radiswap_error_handler(request: Request, error: RadiswapError) -> JSONResponse:
    """Map pool and ledger errors to JSON error responses."""
    status_code = status_for(error)
    logger.warning(
        "request_rejected",
        path=request.url.path,
        error=type(error).__name__,
        detail=str(error),
        status_code=status_code,
    )
    body = ErrorResponse(error=type(error).__name__, detail=str(error))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, error: Exception) -> JSONResponse:
    """Log unexpected failures; the ledger transaction has already rolled back."""
    logger.exception("request_failed", path=request.url.path, error=type(error).__name__)
    body = ErrorResponse(error="InternalError", detail="Internal server error")
    return JSONResponse(status_code=500, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the Radiswap API server.

    Configuration via environment variables:
    - RADISWAP_HOST: Host to bind to (default: 0.0.0.0)
    - RADISWAP_PORT: Port to bind to (default: 8000)
    - RADISWAP_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "radiswap.api.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        reload=SETTINGS.debug,
    )


if __name__ == "__main__":
    run()
