"""In-memory users REST API.

The package exposes the uvicorn launchers (``main`` runs with reload) and the
environment-driven :class:`BackendSettings`.
"""

from users_backend.main import run_dev, run_prod
from users_backend.settings import BackendSettings, get_settings, settings

main = run_dev

__all__ = [
    "BackendSettings",
    "get_settings",
    "main",
    "run_dev",
    "run_prod",
    "settings",
]
