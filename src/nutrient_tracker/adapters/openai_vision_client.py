"""OpenAI Chat Completions client for nutrient estimation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrient_tracker.services.estimation import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client backed by OpenAI chat completions in JSON mode."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def estimate(
        self,
        *,
        model: str,
        image_data_url: str,
        prompt: str,
        max_tokens: int,
    ) -> str | None:
        """Send the image and prompt, returning the reply text."""
        response = await self.client.chat.completions.create(
            model=model,
            response_format={"type": "json_object"},
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_data_url}},
                    ],
                }
            ],
            max_tokens=max_tokens,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
