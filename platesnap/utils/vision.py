
from __future__ import annotations

import logging
from typing import Callable, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from platesnap.config import Settings
from platesnap.errors import ModelInvocationError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

FOOD_PROMPT = """Analyze this food image and identify all food items visible. For each item, estimate the weight in grams if possible, otherwise use null.

Return ONLY valid JSON in this exact format (no markdown, no code blocks, no additional text):
{
  "items": [
    { "name": "item name", "estimatedGrams": 100 },
    { "name": "item name", "estimatedGrams": null }
  ]
}

Be specific with food item names. If you cannot estimate the weight, use null for estimatedGrams."""


class VisionModel(Protocol):
    def describe(self, prompt: str, image: bytes, mime_type: str) -> str:
        ...


class GeminiVisionModel:
    """Gemini generate_content with the prompt and the image as an inline part."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-flash", timeout: float = 60.0):
        self.model = model
        self.timeout = timeout
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiVisionModel":
        return cls(settings.gemini_api_key, settings.gemini_model, settings.model_timeout)

    def describe(self, prompt: str, image: bytes, mime_type: str) -> str:
        # inline 이미지 바이트는 SDK 가 base64 로 인코딩해서 전송
        part = types.Part.from_bytes(data=image, mime_type=mime_type)
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=[prompt, part],
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                f"Gemini request timed out after {self.timeout:g}s"
            ) from e
        except genai_errors.APIError as e:
            logger.error("Gemini request failed: %s", e)
            raise ModelInvocationError(f"Gemini request failed: {e}") from e

        return response.text or ""


ModelFactory = Callable[[Settings], VisionModel]


def get_model_factory() -> ModelFactory:
    return GeminiVisionModel.from_settings
