"""Run the gymreg API with uvicorn."""

from __future__ import annotations

import uvicorn

from gymreg.config import Settings
from gymreg.logging import setup_logging


def main() -> None:
    """Start the HTTP server using GYMREG_* settings."""
    settings = Settings.from_env()
    setup_logging()

    from gymreg.api.app import create_app  # noqa: PLC0415

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
