"""Run the query emulator with uvicorn."""

import uvicorn

from ..config import configure_logging, get_settings
from .app import create_app
from .store import QueryStore


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        create_app(QueryStore.with_sample_devices(250), settings),
        host=settings.emulator_host,
        port=settings.emulator_port,
        log_level=settings.log_level.lower()
    )
