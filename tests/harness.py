"""Test harness for use case and integration tests."""

import pytest_asyncio

from tests.di import RedditStub, build_test_container
from urlsum.util.di import Component


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Serves Reddit from an empty ``RedditStub`` (fetch it from the
      container to script responses)

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_get_content(unit_env):
            stub = await unit_env.get(RedditStub)
            stub.add("/r/python/hot.json", json=...)
            use_case = await unit_env.get(GetContentUseCase)
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), stub=RedditStub())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
