"""OpenRouter chat completions through the OpenAI SDK."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from recipe_planner.services.suggestions import CompletionClient


@dataclass
class OpenRouterCompletionClient(CompletionClient):
    """Completion client backed by the OpenRouter chat completions API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        *,
        api_key: str,
        base_url: str,
        model: str,
        referer: str,
        title: str,
    ) -> "OpenRouterCompletionClient":
        """Create a client that identifies the app to OpenRouter."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                default_headers={"HTTP-Referer": referer, "X-Title": title},
            ),
            model=model,
        )

    async def complete(
        self, prompt: str, *, temperature: float, max_tokens: int
    ) -> str:
        """Send a single user message and return the reply text."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
