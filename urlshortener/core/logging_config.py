import logging
import sys
from typing import Optional

from urlshortener.core.config import settings

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
APP_LOGGER = "urlshortener"

# Chatty third-party loggers, kept at WARNING unless the service runs at DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "redis", "httpx")


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    level_name = (level or settings.LOG_LEVEL).upper()
    debug = level_name == "DEBUG"

    logging.basicConfig(
        level=level_name,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.error").propagate = True
    # Redirects are logged by the service itself
    logging.getLogger("uvicorn.access").disabled = not debug

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if debug else logging.WARNING)

    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level_name)
    return logger
