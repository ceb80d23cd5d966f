
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin, urlsplit

import requests

from platesnap.config import Settings
from platesnap.errors import (
    ClientInputError,
    ServerConfigError,
    UpstreamFetchError,
    UpstreamTimeoutError,
)
from platesnap.utils.model_output import parse_analysis
from platesnap.utils.vision import FOOD_PROMPT, ModelFactory

logger = logging.getLogger(__name__)

_MIME_BY_EXT = (
    (".png", "image/png"),
    (".webp", "image/webp"),
    (".gif", "image/gif"),
)
DEFAULT_MIME = "image/jpeg"


def infer_mime_type(image_url: str) -> str:
    """URL 끝 확장자만 보고 판단 (바이트/응답 헤더는 보지 않음)."""
    lowered = image_url.lower()
    for ext, mime in _MIME_BY_EXT:
        if lowered.endswith(ext):
            return mime
    return DEFAULT_MIME


def resolve_image_url(image_url: str, public_base_url: Optional[str]) -> str:
    if public_base_url and not urlsplit(image_url).scheme:
        return urljoin(public_base_url, image_url)
    return image_url


def fetch_image(url: str, timeout: float) -> bytes:
    try:
        res = requests.get(url, timeout=timeout)
    except requests.exceptions.Timeout as e:
        logger.warning("Image fetch timed out: %s", url)
        raise UpstreamTimeoutError(
            f"Failed to fetch image from URL: timed out after {timeout:g}s"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.warning("Image fetch failed: %s (%s)", url, e)
        raise UpstreamFetchError(f"Failed to fetch image from URL: {e}") from e

    if not 200 <= res.status_code < 300:
        logger.warning("Image fetch returned %s: %s", res.status_code, url)
        raise UpstreamFetchError(
            "Failed to fetch image from URL: "
            f"Failed to fetch image: {res.status_code} {res.reason}"
        )
    return res.content


def analyze_image(
    image_url: Any,
    settings: Settings,
    model_factory: ModelFactory,
) -> Dict[str, Any]:
    """
    imageUrl 검증 → 이미지 다운로드 → Gemini 호출 → JSON 추출/검증.
    어느 단계든 실패하면 PlateSnapError 하위 예외로 종료 (재시도 없음).
    """
    if not isinstance(image_url, str) or not image_url.strip():
        raise ClientInputError("imageUrl is required and must be a non-empty string")

    if not settings.gemini_api_key:
        raise ServerConfigError("GEMINI_API_KEY environment variable is not set")

    image = fetch_image(
        resolve_image_url(image_url, settings.public_base_url),
        settings.fetch_timeout,
    )
    mime_type = infer_mime_type(image_url)

    model = model_factory(settings)
    text = model.describe(FOOD_PROMPT, image, mime_type)

    result = parse_analysis(text)
    logger.info("Analyzed %s: %d item(s)", image_url, len(result["items"]))
    return result
