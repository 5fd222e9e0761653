"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_engine.adapters.openai_enrichment_client import OpenAIEnrichmentClient
from nutrition_engine.adapters.wolfram_client import HttpxWolframClient
from nutrition_engine.config import Settings, resolve_provider
from nutrition_engine.services.engine import NutritionEngine
from nutrition_engine.services.enrichment import (
    DisabledEnrichmentClient,
    EnrichmentService,
)
from nutrition_engine.services.rate_limit import SlidingWindowRateLimiter
from nutrition_engine.services.store import InMemoryStore

_logger = logging.getLogger(__name__)

EnrichmentBackend = (
    HttpxWolframClient | OpenAIEnrichmentClient | DisabledEnrichmentClient
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    enrichment_service: EnrichmentService
    nutrition_engine: NutritionEngine
    rate_limiter: SlidingWindowRateLimiter
    close_resources: Callable[[], Awaitable[None]]


def build_enrichment_client(settings: Settings) -> EnrichmentBackend:
    """Create the enrichment client for the configured provider."""
    provider = resolve_provider(settings)
    if provider == "wolfram":
        return HttpxWolframClient.create(
            app_id=settings.wolfram_app_id or "", base_url=settings.wolfram_base_url
        )
    if provider == "openai":
        return OpenAIEnrichmentClient.create(
            api_key=settings.openai_api_key or "", model=settings.openai_model
        )
    if settings.enrichment_provider.strip().lower() != "disabled":
        _logger.warning(
            "Enrichment provider %s has no credentials; using formulas only",
            settings.enrichment_provider,
        )
    return DisabledEnrichmentClient()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    enrichment_client = build_enrichment_client(resolved_settings)
    enrichment_service = EnrichmentService(
        client=enrichment_client,
        timeout_seconds=resolved_settings.enrichment_timeout_seconds,
    )
    nutrition_engine = NutritionEngine.create(enrichment_service)
    rate_limiter = SlidingWindowRateLimiter(
        store=InMemoryStore(),
        window_seconds=resolved_settings.rate_limit_window_seconds,
        max_requests=resolved_settings.rate_limit_max_requests,
    )

    async def close_resources() -> None:
        await enrichment_client.close()

    return AppContainer(
        settings=resolved_settings,
        enrichment_service=enrichment_service,
        nutrition_engine=nutrition_engine,
        rate_limiter=rate_limiter,
        close_resources=close_resources,
    )
