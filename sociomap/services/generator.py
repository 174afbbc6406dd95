from __future__ import annotations

import logging
from typing import Protocol

import anthropic
import openai
from openai import AsyncOpenAI

from sociomap.config import Settings
from sociomap.errors import UpstreamGenerationError

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate recommendations"


class TextGenerator(Protocol):
    """Anything that turns a system role and a prompt into generated text.

    Implementations raise :class:`UpstreamGenerationError` on failure.
    """

    async def generate(self, system_role: str, prompt: str) -> str: ...


class OpenAITextGenerator:
    """Chat-completions backed generator."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, system_role: str, prompt: str) -> str:
        if not self.api_key:
            logger.error("Generation requested but OPENAI_API_KEY is not set")
            raise UpstreamGenerationError(GENERATION_FAILED)

        try:
            client = AsyncOpenAI(api_key=self.api_key)
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_role},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.AuthenticationError as exc:
            logger.error("OpenAI authentication failed, check OPENAI_API_KEY")
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except openai.RateLimitError as exc:
            logger.warning("OpenAI rate limit exceeded")
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except openai.APIError as exc:
            logger.error("OpenAI API error: %s", exc)
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except Exception as exc:
            logger.exception("Unexpected error calling OpenAI: %s", exc)
            raise UpstreamGenerationError(GENERATION_FAILED) from exc

        if not response.choices or not response.choices[0].message.content:
            logger.error("OpenAI returned no completion candidate")
            raise UpstreamGenerationError(GENERATION_FAILED)
        return response.choices[0].message.content


class AnthropicTextGenerator:
    """Messages-API backed generator."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def generate(self, system_role: str, prompt: str) -> str:
        if not self.api_key:
            logger.error("Generation requested but ANTHROPIC_API_KEY is not set")
            raise UpstreamGenerationError(GENERATION_FAILED)

        try:
            client = anthropic.AsyncAnthropic(api_key=self.api_key)
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=system_role,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AuthenticationError as exc:
            logger.error("Anthropic authentication failed, check ANTHROPIC_API_KEY")
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except anthropic.RateLimitError as exc:
            logger.warning("Anthropic rate limit exceeded")
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except anthropic.APIError as exc:
            logger.error("Anthropic API error: %s", exc)
            raise UpstreamGenerationError(GENERATION_FAILED) from exc
        except Exception as exc:
            logger.exception("Unexpected error calling Anthropic: %s", exc)
            raise UpstreamGenerationError(GENERATION_FAILED) from exc

        text = getattr(response.content[0], "text", None) if response.content else None
        if not text:
            logger.error("Anthropic returned no text block")
            raise UpstreamGenerationError(GENERATION_FAILED)
        return text


def build_text_generator(settings: Settings) -> TextGenerator:
    """Instantiate the provider named by ``settings.llm_provider``."""
    provider = settings.llm_provider.lower()
    if provider == "openai":
        return OpenAITextGenerator(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
        )
    if provider == "anthropic":
        return AnthropicTextGenerator(
            api_key=settings.anthropic_api_key,
            model=settings.anthropic_model,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
        )
    raise ValueError(f"Unknown LLM_PROVIDER: {settings.llm_provider!r}")
