"""
Text generation with provider fallback.

The primary model is tried first; when it fails or answers with nothing the
next provider is asked. Only when every provider has failed does the caller
see an error.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from garden_shared.clients.base import CircuitOpenError
from garden_shared.errors import UpstreamServiceError, UpstreamUnavailableError
from herbal_garden.clients.gemini import GeminiProvider, ImagePart, OpenAICompatibleProvider
from herbal_garden.config.settings import Settings

logger = logging.getLogger(__name__)


class TextProvider(Protocol):
    provider_name: str
    model: str

    async def generate(self, prompt: str, image: ImagePart | None = None) -> str: ...

    async def close(self) -> None: ...


@dataclass
class GenerationResult:
    """Text produced by whichever provider answered."""

    text: str
    model: str
    provider: str


class TextGenerator:
    """
    Ordered chain of text providers.

    Transport errors, error statuses, open circuits, missing candidates and
    empty answers all move on to the next provider.
    """

    def __init__(self, providers: list[TextProvider]):
        if not providers:
            raise ValueError("TextGenerator needs at least one provider")
        self.providers = providers

    @property
    def models(self) -> list[str]:
        return [p.model for p in self.providers]

    async def generate(self, prompt: str, image: ImagePart | None = None) -> GenerationResult:
        """
        Generate text from the first provider that succeeds.

        Args:
            prompt: Full prompt text
            image: Optional image for vision-capable models

        Returns:
            GenerationResult naming the model that answered

        Raises:
            UpstreamUnavailableError: Every provider was unreachable
            UpstreamServiceError: Every provider failed, at least one by answering badly
        """
        errors: dict[str, str] = {}
        unreachable = 0

        for provider in self.providers:
            try:
                text = await provider.generate(prompt, image)
            except (httpx.TransportError, CircuitOpenError) as e:
                unreachable += 1
                errors[provider.model] = str(e) or type(e).__name__
                logger.warning("Model %s unreachable: %s", provider.model, e, extra={"model": provider.model})
                continue
            except (httpx.HTTPStatusError, UpstreamServiceError) as e:
                errors[provider.model] = str(e)
                logger.warning("Model %s failed: %s", provider.model, e, extra={"model": provider.model})
                continue

            if not text or not text.strip():
                errors[provider.model] = "empty response"
                logger.warning("Model %s returned an empty response", provider.model, extra={"model": provider.model})
                continue

            return GenerationResult(text=text, model=provider.model, provider=provider.provider_name)

        if unreachable == len(self.providers):
            raise UpstreamUnavailableError("All generative models are unreachable", details={"errors": errors})
        raise UpstreamServiceError("All generative models failed", details={"errors": errors})

    async def close(self) -> None:
        for provider in self.providers:
            await provider.close()


def build_text_generator(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> TextGenerator:
    """Primary Gemini model followed by the configured fallback provider."""
    common = {
        "timeout": settings.HTTP_TIMEOUT_SECONDS,
        "max_retries": settings.HTTP_MAX_RETRIES,
        "transport": transport,
    }
    providers: list[TextProvider] = [
        GeminiProvider(settings.GEMINI_API_KEY, settings.CHAT_MODEL, settings.GEMINI_BASE_URL, **common)
    ]

    if settings.FALLBACK_PROVIDER == "openai":
        if settings.FALLBACK_API_KEY:
            providers.append(
                OpenAICompatibleProvider(
                    settings.FALLBACK_API_KEY, settings.FALLBACK_MODEL, settings.FALLBACK_BASE_URL, **common
                )
            )
        else:
            logger.warning("FALLBACK_PROVIDER=openai but FALLBACK_API_KEY is not set; fallback disabled")
    elif settings.FALLBACK_MODEL and settings.FALLBACK_MODEL != settings.CHAT_MODEL:
        providers.append(
            GeminiProvider(settings.GEMINI_API_KEY, settings.FALLBACK_MODEL, settings.GEMINI_BASE_URL, **common)
        )

    logger.info("Text generation chain: %s", " -> ".join(p.model for p in providers))
    return TextGenerator(providers)
