# app/core/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op when the root logger already has handlers (uvicorn, pytest)
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
