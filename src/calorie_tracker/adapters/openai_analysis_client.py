"""OpenAI Responses API client for structured meal analysis."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.analysis import AnalysisClient


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, base_url: str | None = None
    ) -> "OpenAIAnalysisClient":
        """Create a client, optionally against an OpenAI-compatible endpoint."""
        return cls(client=AsyncOpenAI(api_key=api_key, base_url=base_url))

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str,
        content: list[dict[str, str]],
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call the Responses API with a strict JSON schema output format."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": instructions,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError(f"OpenAI returned an empty {schema_name} response")
        decoded = json.loads(output_text)
        if not isinstance(decoded, dict):
            raise RuntimeError(f"OpenAI returned a non-object {schema_name} response")
        return decoded

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
