import pytest

from stock_control.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # The CLI configures logging once per process; start every test clean.
    reset_logging()
    yield
    reset_logging()
