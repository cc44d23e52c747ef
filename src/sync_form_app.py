from collections.abc import Awaitable, Callable

import uvicorn
from fasthtml.common import RedirectResponse, fast_app
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response

from sync_form_core import __version__
from sync_form_core.config_manager import get_config_manager
from sync_form_core.logger import get_logger, setup_logging
from sync_form_ui.form_sessions import form_sessions
from sync_form_ui.routes.job_form import setup_job_form_routes

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize configuration
config = get_config_manager()


# Create FastHTML app
app, rt = fast_app(
    pico=False,  # Don't use PicoCSS
)

# Remove FastHTML's default static route (/{fname:path}.{ext:static}); the app serves no files.
if app.routes and "static_route" in getattr(app.routes[0], "name", ""):
    app.routes.pop(0)

# In production, restrict via config.json security.allowed_origins
allowed_origins = config.data.get("security", {}).get("allowed_origins", ["*"])
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_methods=["GET", "HEAD", "POST"],
    allow_headers=["*"],
)


# Request Logging Middleware
class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log incoming requests."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Dispatch the request and log the response."""
        path = request.url.path or ""

        # Form events fire on every change; log them at DEBUG.
        if request.method.upper() == "POST" and path.startswith("/jobs/form/"):
            logger.debug(f"Form event: [{request.method}] {path}")
        else:
            logger.info(f"🌐 [{request.method}] {path}")

        return await call_next(request)


app.add_middleware(LoggingMiddleware)

# Mount routes
logger.info("🔧 Setting up routes...")

setup_job_form_routes(app)


# Root redirect
@rt("/")
def index():
    """Redirect root to the job form."""
    return RedirectResponse(url="/jobs/new")


# Health check
@rt("/health")
def health():
    """Simple health check endpoint."""
    return {"status": "ok", "version": __version__, "form_sessions": len(form_sessions)}


def main():
    """Punto di ingresso per il comando sync-form."""
    logger.info("🚀 Starting sync job form (FastHTML + htmx)")
    logger.info(f"📍 Config file: {config.path}")

    # Passing the import string keeps auto-reload working.
    uvicorn.run(
        "sync_form_app:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
        reload_includes=["*.py"],
        reload_excludes=["data/*", "logs/*"],
    )


if __name__ == "__main__":
    main()
