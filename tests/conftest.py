import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    # Countdown drives sessions with asyncio tasks.
    return "asyncio"
