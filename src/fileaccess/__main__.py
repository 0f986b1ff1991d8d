"""Entrypoint for running the FastAPI server."""

from __future__ import annotations

import uvicorn

from .config import get_settings
from .log import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, log_path=settings.log_file)
    uvicorn.run(
        "fileaccess.api:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
