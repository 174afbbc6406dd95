from __future__ import annotations

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from sociomap.api.dependencies import get_text_generator
from sociomap.api.main import app
from sociomap.errors import UpstreamGenerationError
from sociomap.services.metrics import metrics
from sociomap.services.prompts import CATEGORIES


class StubGenerator:
    """Deterministic TextGenerator keyed on the category label in the prompt."""

    def __init__(
        self,
        fail: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.fail = fail or set()
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_role: str, prompt: str) -> str:
        self.calls.append((system_role, prompt))
        for category in CATEGORIES:
            if f"for {category.label} for" in prompt:
                await asyncio.sleep(self.delays.get(category.slug, 0))
                if category.slug in self.fail:
                    raise UpstreamGenerationError(f"{category.label} provider down")
                return f"{category.label} recommendations"
        raise AssertionError(f"No category label in prompt: {prompt!r}")


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
async def client(generator):
    app.dependency_overrides[get_text_generator] = lambda: generator
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_text_generator, None)


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()
