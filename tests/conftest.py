import logging

import pytest


@pytest.fixture(autouse=True)
def reset_strictool_logger():
    """setup_logging replaces handlers; restore a propagating logger afterwards."""
    yield
    strictool_logger = logging.getLogger("strictool")
    for handler in list(strictool_logger.handlers):
        strictool_logger.removeHandler(handler)
        handler.close()
    strictool_logger.propagate = True
    strictool_logger.setLevel(logging.NOTSET)
    logging.getLogger().setLevel(logging.WARNING)
