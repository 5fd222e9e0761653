"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from nutrition_engine.config import Settings
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.errors import EnrichmentError
from nutrition_engine.domain.requests import BiometricInput
from nutrition_engine.services.engine import NutritionEngine
from nutrition_engine.services.enrichment import EnrichmentClient, EnrichmentService
from nutrition_engine.services.rate_limit import SlidingWindowRateLimiter
from nutrition_engine.services.store import InMemoryStore


@dataclass
class ScriptedEnrichmentClient(EnrichmentClient):
    """Fake enrichment client answering queries by prefix and failing otherwise."""

    answers: dict[str, str] = field(default_factory=dict)
    queries: list[str] = field(default_factory=list)

    async def query(self, text: str, timeout: float) -> str:
        self.queries.append(text)
        for prefix, answer in self.answers.items():
            if text.startswith(prefix):
                return answer
        raise EnrichmentError(f"No answer for {text}")

    async def close(self) -> None:
        return None


@dataclass
class SlowEnrichmentClient(EnrichmentClient):
    """Fake client that sleeps before answering and tracks concurrency."""

    delay_seconds: float = 0.05
    answer: str = "42"
    in_flight: int = 0
    peak_in_flight: int = 0

    async def query(self, text: str, timeout: float) -> str:
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay_seconds)
        finally:
            self.in_flight -= 1
        return self.answer


def make_engine(
    client: EnrichmentClient, timeout_seconds: float = 1.0
) -> NutritionEngine:
    return NutritionEngine.create(
        EnrichmentService(client=client, timeout_seconds=timeout_seconds)
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        enrichment_provider="disabled",
        wolfram_app_id=None,
        openai_api_key=None,
        enrichment_timeout_seconds=1.0,
        rate_limit_window_seconds=60,
        rate_limit_max_requests=100,
    )


@pytest.fixture
def biometrics() -> BiometricInput:
    return BiometricInput(
        age=30,
        gender="male",
        height_cm=180,
        weight_kg=80,
        activity_level="moderate",
        health_goal="weight-loss",
    )


@pytest.fixture
def enrichment_client() -> ScriptedEnrichmentClient:
    return ScriptedEnrichmentClient()


@pytest.fixture
def container(
    settings: Settings, enrichment_client: ScriptedEnrichmentClient
) -> AppContainer:
    enrichment_service = EnrichmentService(
        client=enrichment_client,
        timeout_seconds=settings.enrichment_timeout_seconds,
    )

    async def close_resources() -> None:
        await enrichment_client.close()

    return AppContainer(
        settings=settings,
        enrichment_service=enrichment_service,
        nutrition_engine=NutritionEngine.create(enrichment_service),
        rate_limiter=SlidingWindowRateLimiter(
            store=InMemoryStore(),
            window_seconds=settings.rate_limit_window_seconds,
            max_requests=settings.rate_limit_max_requests,
        ),
        close_resources=close_resources,
    )
