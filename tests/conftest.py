import pytest

from symbolic_diff.logging_system import LogLevel, configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(LogLevel.MINIMAL)
    yield
