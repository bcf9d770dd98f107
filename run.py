"""Entry point for the Money Transfer API server.

Starts the FastAPI application under Uvicorn.  Configuration comes
from environment variables (see ``money_transfer_api.app.core.config``),
for example ``STORAGE_BACKEND=mongo`` to use MongoDB instead of the
JSON files in ``DATA_DIR``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from money_transfer_api.app.core.config import settings
from money_transfer_api.app.main import app


async def main() -> None:
    """Serve the API on ``HOST``:``PORT`` (defaults ``0.0.0.0:5000``)."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger("money_transfer_api.run").info("Main server running on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
