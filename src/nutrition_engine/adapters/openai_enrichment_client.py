"""OpenAI Responses API client for short nutrition answers."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from nutrition_engine.domain.errors import EnrichmentError
from nutrition_engine.services.enrichment import EnrichmentClient

_INSTRUCTIONS = (
    "You are a nutrition calculator. Answer in one short line of plain text. "
    "When the question asks for a quantity, start the answer with the number "
    "in metric units."
)


@dataclass
class OpenAIEnrichmentClient(EnrichmentClient):
    """Enrichment client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIEnrichmentClient":
        """Create an OpenAI enrichment client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def query(self, text: str, timeout: float) -> str:
        """Ask the model for a short answer."""
        try:
            response = await self.client.responses.create(
                model=self.model,
                instructions=_INSTRUCTIONS,
                input=text,
                store=False,
                timeout=timeout,
            )
        except OpenAIError as exc:
            raise EnrichmentError(f"OpenAI request failed: {exc!r}") from exc
        output_text = (response.output_text or "").strip()
        if not output_text:
            raise EnrichmentError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
