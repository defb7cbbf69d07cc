# app/__main__.py
import logging

import uvicorn

from app.core.config import get_settings
from app.core.logging_config import configure_logging

logger = logging.getLogger("app")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Server running on http://%s:%s", settings.HOST, settings.PORT)
    logger.info("API docs available at http://%s:%s/api-docs", settings.HOST, settings.PORT)
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
