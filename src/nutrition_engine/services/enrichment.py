"""Best-effort enrichment through a natural-language computation service."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from nutrition_engine.domain.errors import EnrichmentError

_logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(
    r"^\s*([-+]?(?:\d{1,3}(?:,\d{3})+(?![\d,])|\d+)"
    r"(?:\.\d*)?|[-+]?\.\d+)(?:[eE][-+]?\d+)?"
)


class EnrichmentClient(Protocol):
    """Interface for a text query endpoint."""

    async def query(self, text: str, timeout: float) -> str:
        """Return the short answer for a query or raise EnrichmentError."""


@dataclass
class DisabledEnrichmentClient(EnrichmentClient):
    """Client used when no enrichment provider is configured."""

    async def query(self, text: str, timeout: float) -> str:
        """Always fail so callers take the formula path."""
        raise EnrichmentError("Enrichment is disabled")

    async def close(self) -> None:
        """Nothing to release."""


@dataclass
class EnrichmentService:
    """Runs single enrichment queries with a hard per-call timeout."""

    client: EnrichmentClient
    timeout_seconds: float = 10.0

    async def query(self, text: str) -> str:
        """Return a non-empty answer for the query."""
        try:
            answer = await asyncio.wait_for(
                self.client.query(text, self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
        except TimeoutError as exc:
            _logger.warning(
                "Enrichment timed out after %ss: query=%s", self.timeout_seconds, text
            )
            raise EnrichmentError(
                f"Enrichment timed out after {self.timeout_seconds}s"
            ) from exc
        except EnrichmentError as exc:
            _logger.warning("Enrichment failed: query=%s error=%s", text, exc)
            raise
        answer = (answer or "").strip()
        if not answer:
            _logger.warning("Enrichment returned an empty answer: query=%s", text)
            raise EnrichmentError("Enrichment returned an empty answer")
        return answer

    async def query_number(self, text: str) -> float | None:
        """Return the leading number of the answer, or None when there is none."""
        return parse_number(await self.query(text))


def parse_number(answer: str) -> float | None:
    """Parse the leading decimal number of a short answer.

    Thousands separators are accepted (``"2,450 Calories"`` gives 2450.0).
    """
    match = _LEADING_NUMBER.match(answer)
    if match is None:
        return None
    return float(match.group(0).replace(",", "").strip())
