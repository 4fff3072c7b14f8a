import pytest

from stockflow.logging_config import LogContext, reset_logging


@pytest.fixture(autouse=True)
def _isolated_logging():
    """Each test starts with unconfigured logging and an empty log context."""
    reset_logging()
    LogContext.clear()
    yield
    reset_logging()
    LogContext.clear()
