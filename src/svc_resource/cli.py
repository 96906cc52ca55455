from __future__ import annotations

import os
from typing import Optional

import typer
import uvicorn

from svc_resource.app.core.logging import setup_logging
from svc_resource.app.settings import get_app_settings

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def _root(
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL (DEBUG, INFO, ...)"),
    log_format: Optional[str] = typer.Option(None, help="Override LOG_FORMAT (plain or json)"),
):
    """Serve a schema-driven CRUD API over a MongoDB collection."""
    # uvicorn builds the app in its own process under --reload; it reads these back
    if log_level:
        os.environ["LOG_LEVEL"] = log_level
    if log_format:
        os.environ["LOG_FORMAT"] = log_format
    setup_logging()


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address; defaults to APP_HOST"),
    port: Optional[int] = typer.Option(None, help="Port; defaults to APP_PORT (3000)"),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
):
    """Start the HTTP server."""
    settings = get_app_settings(host=host, port=port)
    os.environ["APP_HOST"] = settings.host
    os.environ["APP_PORT"] = str(settings.port)
    get_app_settings.cache_clear()
    uvicorn.run(
        "svc_resource.main:serve_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_config=None,  # serve_app installs the handlers
    )


def main() -> None:
    app()
