import logging

import pytest

from relviz.logging_config import setup_logging


@pytest.fixture
def relviz_logger():
    logger = logging.getLogger("relviz")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def test_records_from_submodules_reach_the_log_file(relviz_logger, tmp_path):
    log_file = tmp_path / "relviz.log"
    assert setup_logging(logging.INFO, str(log_file)) is relviz_logger

    logging.getLogger("relviz.session").warning("Skipping frame on waves tab")
    logging.getLogger("relviz.session").debug("not at this level")
    for handler in relviz_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "relviz.session - WARNING - Skipping frame on waves tab" in text
    assert "not at this level" not in text


def test_repeated_setup_does_not_stack_handlers(relviz_logger, tmp_path):
    setup_logging(logging.DEBUG, str(tmp_path / "first.log"))
    setup_logging(logging.DEBUG)
    assert len(relviz_logger.handlers) == 1
    assert relviz_logger.level == logging.DEBUG
