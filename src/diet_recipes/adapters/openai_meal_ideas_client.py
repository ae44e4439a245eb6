"""OpenAI Responses API client for meal idea generation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from diet_recipes.services.meal_ideas import MealIdeaClient


@dataclass
class OpenAIMealIdeaClient(MealIdeaClient):
    """Meal idea client backed by OpenAI structured outputs."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIMealIdeaClient":
        """Create an OpenAI meal idea client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call the Responses API with a strict JSON schema."""
        response = await self.client.responses.create(
            model=model,
            input=[{"role": "user", "content": prompt}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "meal_ideas",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=store,
        )
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)
