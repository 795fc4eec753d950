import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from minio_uploader import setup_logging
from minio_uploader.logging import NOISY_LOGGERS


@pytest.fixture
def restore_loggers():
    root = logging.getLogger()
    http_loggers = [logging.getLogger(name) for name in NOISY_LOGGERS]
    handlers, level = root.handlers[:], root.level
    http_levels = [logger.level for logger in http_loggers]
    yield
    root.handlers = handlers
    root.setLevel(level)
    for logger, http_level in zip(http_loggers, http_levels):
        logger.setLevel(http_level)


@pytest.mark.unit
def test_should_install_single_json_handler_on_root_logger(restore_loggers) -> None:
    root = setup_logging()

    assert root is logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


@pytest.mark.unit
def test_should_accept_level_name(restore_loggers) -> None:
    root = setup_logging("DEBUG")

    assert root.level == logging.DEBUG


@pytest.mark.unit
def test_should_limit_urllib3_retry_logging_to_errors(restore_loggers) -> None:
    setup_logging()

    assert logging.getLogger("urllib3").level == logging.ERROR
    assert not logging.getLogger("urllib3.connectionpool").isEnabledFor(
        logging.WARNING
    )
