"""Image generation providers.

Every provider is a coroutine taking the compiled prompt and returning an
image URL. Missing credentials, unknown provider names and provider failures
all resolve to a placeholder URL, so callers never see a generation error.
"""

import asyncio
import logging
from enum import Enum
from typing import Any
from urllib.parse import quote_plus

from openai import AsyncOpenAI

from design_agent.generation.prompt import build_prompt

logger = logging.getLogger(__name__)

PLACEHOLDER_BASE = "https://via.placeholder.com/1024x1024"

OPENAI_IMAGE_MODEL = "dall-e-3"


class Provider(str, Enum):
    OPENAI = "openai"
    GEMINI = "gemini"
    QWEN = "qwen"


def placeholder_url(background: str, text: str) -> str:
    return f"{PLACEHOLDER_BASE}/{background}/FFFFFF?text={quote_plus(text)}"


def is_placeholder(url: str) -> bool:
    return url.startswith(PLACEHOLDER_BASE)


ERROR_PLACEHOLDER = placeholder_url("EF4444", "Error Generating Design")


class GenerationService:
    def __init__(
        self,
        openai_api_key: str | None = None,
        gemini_api_key: str | None = None,
        qwen_api_key: str | None = None,
        openai_client: Any = None,
    ):
        self.keys = {
            Provider.OPENAI: openai_api_key,
            Provider.GEMINI: gemini_api_key,
            Provider.QWEN: qwen_api_key,
        }
        if openai_client is None and openai_api_key:
            openai_client = AsyncOpenAI(api_key=openai_api_key)
        self._openai = openai_client

        for provider, key in self.keys.items():
            if key:
                logger.info("%s provider configured", provider.value)
            else:
                logger.warning("%s API key not configured", provider.value)

        self._strategies = {
            Provider.OPENAI.value: self._openai_image,
            Provider.GEMINI.value: self._gemini_image,
            Provider.QWEN.value: self._qwen_image,
        }

    @classmethod
    def from_settings(cls, settings) -> "GenerationService":
        return cls(
            openai_api_key=settings.openai_api_key,
            gemini_api_key=settings.gemini_api_key,
            qwen_api_key=settings.qwen_api_key,
        )

    def providers(self) -> list[dict[str, Any]]:
        return [{"name": p.value, "available": bool(self.keys[p])} for p in Provider]

    async def _openai_image(self, prompt: str) -> str:
        if self._openai is None:
            return placeholder_url("FF6B6B", "OpenAI Not Configured")
        response = await self._openai.images.generate(
            model=OPENAI_IMAGE_MODEL,
            prompt=prompt,
            n=1,
            size="1024x1024",
            quality="hd",
            style="vivid",
        )
        return response.data[0].url or ""

    async def _gemini_image(self, prompt: str) -> str:
        if not self.keys[Provider.GEMINI]:
            return placeholder_url("4F46E5", "Gemini Not Configured")
        return placeholder_url("4F46E5", "Gemini Generated Design")

    async def _qwen_image(self, prompt: str) -> str:
        return placeholder_url("10B981", "Qwen Generated Design")

    async def generate(self, project: dict[str, Any], content: dict[str, Any] | None, provider: str) -> str:
        name = (provider or "").lower()
        strategy = self._strategies.get(name)
        if strategy is None:
            return placeholder_url("6B7280", f"Demo Design {name.upper()}")

        prompt = build_prompt(project, content)
        try:
            url = await strategy(prompt)
        except Exception:
            logger.exception("Error generating design with %s", name)
            return ERROR_PLACEHOLDER
        if not url:
            logger.error("%s returned no image URL", name)
            return ERROR_PLACEHOLDER
        return url

    async def generate_many(
        self, project: dict[str, Any], content: dict[str, Any] | None, provider: str, count: int
    ) -> list[str]:
        """Run ``count`` independent generations concurrently and return all URLs."""
        results = await asyncio.gather(
            *(self.generate(project, content, provider) for _ in range(count))
        )
        return list(results)
