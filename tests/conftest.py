"""Root pytest configuration for all tests.

This conftest applies to all test types (unit and integration).
"""

import logging

import pytest

# atlassian-python-api logs missing pages at ERROR level.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Undo handler and propagation changes made by _configure_logging."""
    yield
    app_logger = logging.getLogger("confluence_publisher")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
