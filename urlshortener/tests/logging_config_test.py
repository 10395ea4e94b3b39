import logging

from urlshortener.core.logging_config import configure_logging


def test_configure_logging_returns_app_logger():
    logger = configure_logging("warning")
    assert logger.name == "urlshortener"
    assert logger.level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    assert logging.getLogger("uvicorn.access").disabled is True


def test_debug_level_opens_up_third_party_logs():
    try:
        logger = configure_logging("debug")
        assert logger.level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
        assert logging.getLogger("uvicorn.access").disabled is False
    finally:
        configure_logging("info")
