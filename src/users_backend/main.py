"""ASGI entrypoint serving the users API.

``app`` is built once at import time. uvicorn gets ``log_config=None`` so its
loggers fall back to the stdlib setup done by ``configure_logging``.
"""

from __future__ import annotations

import uvicorn

from users_backend.api import create_api
from users_backend.settings import get_settings

app = create_api()


def _run_uvicorn(*, reload: bool) -> None:
    """Start uvicorn with a consistent configuration."""
    config = get_settings()
    uvicorn.run(
        "users_backend.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=reload,
        log_config=None,
    )


def run_dev() -> None:
    """Run the development ASGI server with auto-reload."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    """Run the production ASGI server without auto-reload."""
    _run_uvicorn(reload=False)
