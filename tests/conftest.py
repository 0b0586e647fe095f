import logging

import pytest


@pytest.fixture(autouse=True)
def _fresh_package_logger():
    # handlers bind sys.stderr when created; capsys swaps it per test
    yield
    logger = logging.getLogger("geo_route")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
