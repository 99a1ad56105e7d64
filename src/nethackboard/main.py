# src/nethackboard/main.py

"""Main FastAPI application for the NetHackBoard dashboard."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from . import config
from .exceptions import ApiRequestError, NetHackBoardError, ValidationError
from .middleware.logging import RequestLoggingMiddleware
from .rendering import render_template
from .routes import auth, challenges, pages

logger = logging.getLogger(__name__)
logging.getLogger("nethackboard").setLevel(config.LOG_LEVEL)

app = FastAPI(title="NetHackBoard", docs_url=None, redoc_url=None)

# Add middleware (order matters - first added = outermost)
app.add_middleware(RequestLoggingMiddleware)


def _error_page(heading: str, message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(
        render_template("error.html", auth=None, heading=heading, message=message),
        status_code=status_code,
    )


# =============================================================================
# Global Exception Handlers
# =============================================================================
# Views render their own failures inline; these only catch what escapes a route.


@app.exception_handler(ApiRequestError)
async def api_request_error_handler(
    request: Request, exc: ApiRequestError
) -> HTMLResponse:
    """Upstream API failures -> 502."""
    logger.warning("Upstream API error: %s", exc.message, extra=exc.details)
    return _error_page("Request failed", exc.message, 502)


@app.exception_handler(ValidationError)
async def validation_error_handler(
    request: Request, exc: ValidationError
) -> HTMLResponse:
    """Bad page input -> 404, since it names nothing that exists."""
    logger.warning("Validation error: %s", exc.message, extra=exc.details)
    return _error_page("Not Found", exc.message, 404)


@app.exception_handler(NetHackBoardError)
async def nethackboard_error_handler(
    request: Request, exc: NetHackBoardError
) -> HTMLResponse:
    """Catch-all for any other NetHackBoard errors -> 500."""
    logger.error(
        "NetHackBoard error: %s", exc.message, extra=exc.details, exc_info=True
    )
    return _error_page("Something went wrong", exc.message, 500)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """Catch-all for unhandled exceptions."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return _error_page("Something went wrong", "An internal error occurred", 500)


# Include routers into the main application
app.include_router(pages.router)
app.include_router(challenges.router)
app.include_router(auth.router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


def run() -> None:
    """Serve the dashboard with uvicorn."""
    uvicorn.run(
        app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
