"""Run the course marketplace API with uvicorn using the configured host and port."""

from __future__ import annotations

import uvicorn

from src.common.logging import configure_logging
from src.common.settings import get_settings


def main() -> None:
    configure_logging()
    settings = get_settings()
    uvicorn.run("src.api.app:app", host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
