"""Run the API with uvicorn: `python -m ytstats` (HOST / PORT from the environment)."""

import logging

import uvicorn

from ytstats.core.config import settings
from ytstats.main import app

logger = logging.getLogger(__name__)


def main() -> None:
    base = f"http://localhost:{settings.port}"
    logger.info("Health check: %s/health", base)
    logger.info("API endpoint: %s/api/youtube/stats", base)

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
