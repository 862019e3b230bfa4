"""Entry point for the Prompt Library API server.

Serves ``prompt_library_api.app.main:app`` with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker or a process supervisor where you only specify a single Python
file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``8000``).  Set ``RELOAD=1`` to
restart the server when source files change during development.
Application settings such as ``DATABASE_URL``, ``LOG_LEVEL`` and
``LOG_FILE`` are described in ``prompt_library_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server
from uvicorn.supervisors import ChangeReload

from prompt_library_api.app.core.config import settings
from prompt_library_api.app.core.logging_config import setup_logging


def build_config() -> Config:
    """Build the Uvicorn configuration from environment variables."""
    return Config(
        app="prompt_library_api.app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "false").lower() in {"1", "true", "yes"},
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """Configure logging and start the API."""
    # Configure the root logger here, before the app module is imported,
    # so LOG_LEVEL and LOG_FILE apply to the whole process.
    setup_logging(settings.log_level, settings.log_file or None)
    config = build_config()
    server = Server(config)
    if config.should_reload:
        # The reloader runs the server in a child process and restarts it
        # on file changes; it needs a pre-bound socket.
        sock = config.bind_socket()
        ChangeReload(config, target=server.run, sockets=[sock]).run()
    else:
        asyncio.run(server.serve())


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
