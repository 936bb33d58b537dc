"""
Generative Model Providers.

Thin REST clients for the hosted text/vision models. Each provider exposes
``generate(prompt, image=None) -> str`` so the fallback chain in
``generation.py`` can treat them interchangeably.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from garden_shared.clients.base import BaseServiceClient
from garden_shared.errors import UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass
class ImagePart:
    """An image attached to a prompt."""

    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


def _json_object(response: httpx.Response, model: str) -> dict[str, Any]:
    """Decoded body of a 2xx answer; anything but a JSON object is an upstream failure."""
    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamServiceError(f"Model {model} returned a malformed response", details={"reason": str(e)}) from e
    if not isinstance(data, dict):
        raise UpstreamServiceError(f"Model {model} returned a malformed response")
    return data


class GeminiProvider(BaseServiceClient):
    """Google Gemini ``generateContent`` over REST."""

    provider_name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        max_retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url,
            service_name=f"gemini:{model}",
            timeout=timeout,
            max_retries=max_retries,
            headers={"x-goog-api-key": api_key},
            transport=transport,
        )
        self.model = model

    def build_payload(self, prompt: str, image: ImagePart | None = None) -> dict[str, Any]:
        parts: list[dict[str, Any]] = [{"text": prompt}]
        if image is not None:
            parts.append({"inline_data": {"mime_type": image.mime_type, "data": image.base64}})
        return {"contents": [{"role": "user", "parts": parts}]}

    async def generate(self, prompt: str, image: ImagePart | None = None) -> str:
        """
        Generate text for a prompt, optionally grounded on an image.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            UpstreamServiceError: Malformed body or no candidates
        """
        response = await self.post(f"/models/{self.model}:generateContent", json=self.build_payload(prompt, image))
        response.raise_for_status()
        data = _json_object(response, self.model)

        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason")
            raise UpstreamServiceError(
                f"Model {self.model} returned no candidates",
                details={"block_reason": reason} if reason else None,
            )

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)


class OpenAICompatibleProvider(BaseServiceClient):
    """Any ``/chat/completions`` endpoint speaking the OpenAI wire format."""

    provider_name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        max_retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(
            base_url=base_url,
            service_name=f"openai:{model}",
            timeout=timeout,
            max_retries=max_retries,
            headers={"Authorization": f"Bearer {api_key}"},
            transport=transport,
        )
        self.model = model

    def build_payload(self, prompt: str, image: ImagePart | None = None) -> dict[str, Any]:
        if image is None:
            content: Any = prompt
        else:
            content = [
                {"type": "text", "text": prompt},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{image.mime_type};base64,{image.base64}"},
                },
            ]
        return {"model": self.model, "messages": [{"role": "user", "content": content}]}

    async def generate(self, prompt: str, image: ImagePart | None = None) -> str:
        response = await self.post("/chat/completions", json=self.build_payload(prompt, image))
        response.raise_for_status()

        choices = _json_object(response, self.model).get("choices") or []
        if not choices:
            raise UpstreamServiceError(f"Model {self.model} returned no choices")
        return (choices[0].get("message") or {}).get("content") or ""
