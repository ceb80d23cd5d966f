
import json
import logging
import math
from typing import Any, Dict

from platesnap.errors import UpstreamContractViolation

logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 500


def strip_code_fence(text: str) -> str:
    """
    모델이 ```json ... ``` 로 감싸서 답하는 경우를 벗겨낸다.
    첫 줄(펜스 + 언어 태그)을 버리고, 마지막 줄이 닫는 펜스면 그것도 버린다.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines.pop(0)
        if lines and lines[-1].strip() == "```":
            lines.pop()
        cleaned = "\n".join(lines).strip()
    return cleaned


def _reject_constant(name: str):
    # json.loads 는 NaN / Infinity 를 기본 허용 → 엄격한 JSON 으로 취급
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_grams(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # int 는 임의 정밀도라 float 변환(isfinite) 시 OverflowError 가능
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value >= 0


def validate_analysis(parsed: Any) -> None:
    if not isinstance(parsed, dict):
        raise UpstreamContractViolation("Invalid response structure: expected an object")

    items = parsed.get("items")
    if not isinstance(items, list):
        raise UpstreamContractViolation(
            "Invalid response structure: expected 'items' to be an array"
        )

    for item in items:
        if not isinstance(item, dict):
            raise UpstreamContractViolation(
                "Invalid response structure: each item must be an object"
            )
        if not isinstance(item.get("name"), str):
            raise UpstreamContractViolation(
                "Invalid response structure: each item must have a 'name' string property"
            )
        grams = item.get("estimatedGrams", ...)
        if grams is not None and not _is_grams(grams):
            raise UpstreamContractViolation(
                "Invalid response structure: 'estimatedGrams' must be a number >= 0 or null"
            )


def parse_analysis(raw_text: str) -> Dict[str, Any]:
    """Extract, parse and shape-check a model reply. Returns the parsed object as-is."""
    json_text = strip_code_fence(raw_text)
    try:
        parsed = json.loads(json_text, parse_constant=_reject_constant)
    except ValueError as e:
        logger.error("Failed to parse model response as JSON: %s", json_text)
        raise UpstreamContractViolation(
            "Failed to parse response as valid JSON. "
            f"Raw response: {raw_text[:RAW_PREVIEW_CHARS]}"
        ) from e

    validate_analysis(parsed)
    return parsed
