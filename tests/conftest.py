import logging

import pytest

from api_doc_builder.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """CLI runs attach a handler to a captured stream; drop it after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
