"""Shared test fixtures for the dicebag test suite.

sampler
    A Sampler with a fixed seed. Tests must not depend on the concrete values
    it yields, only on them being reproducible.

registry / async_client
    The HTTP app with the set registry swapped for an empty one per test, so
    saved dice never leak between tests.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dicebag.dependencies import get_registry
from dicebag.dice_set import SetRegistry
from dicebag.main import app
from dicebag.sampler import Sampler

SEED = 1234


@pytest.fixture
def sampler() -> Sampler:
    return Sampler(SEED)


@pytest.fixture
def registry() -> SetRegistry:
    return SetRegistry()


@pytest_asyncio.fixture
async def async_client(registry):
    app.dependency_overrides[get_registry] = lambda: registry
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_registry, None)
