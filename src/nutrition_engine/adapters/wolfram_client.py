"""Wolfram|Alpha Short Answers API client."""

from dataclasses import dataclass

import httpx

from nutrition_engine.domain.errors import EnrichmentError
from nutrition_engine.services.enrichment import EnrichmentClient


@dataclass
class HttpxWolframClient(EnrichmentClient):
    """HTTPX-backed Short Answers client."""

    app_id: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, app_id: str, base_url: str) -> "HttpxWolframClient":
        """Create a Wolfram client with a managed httpx session."""
        return cls(app_id=app_id, base_url=base_url, http_client=httpx.AsyncClient())

    async def query(self, text: str, timeout: float) -> str:
        """Send a natural-language query and return the short answer."""
        try:
            response = await self.http_client.get(
                self.base_url,
                params={"appid": self.app_id, "i": text, "units": "metric"},
                timeout=timeout,
            )
        except httpx.HTTPError as exc:
            raise EnrichmentError(f"Wolfram request failed: {exc!r}") from exc
        if response.status_code != httpx.codes.OK:
            raise EnrichmentError(f"Wolfram returned status {response.status_code}")
        answer = response.text.strip()
        if not answer:
            raise EnrichmentError("Wolfram returned an empty answer")
        return answer

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
