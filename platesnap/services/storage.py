
import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Depends

from platesnap.config import Settings, get_settings
from platesnap.errors import InternalIOError

logger = logging.getLogger(__name__)

ALLOWED_TYPES = frozenset({
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
})

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
TOKEN_LENGTH = 7


def random_token(length: int = TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_safe_filename(
    original_name: str,
    now_ms: Optional[int] = None,
    token: Optional[str] = None,
) -> str:
    """
    업로드 원본 파일명 → 저장용 파일명.

    "My Lunch Photo!! .PNG" -> "my-lunch-photo-<unix ms>-<base36 7자>.png"
    확장자는 마지막 '.' 뒤 문자열(소문자). '.'이 없으면 이름 전체가 확장자로도 쓰인다.
    """
    timestamp = int(time.time() * 1000) if now_ms is None else now_ms
    suffix = token or random_token()

    # 경로 구분자 등이 확장자에 섞여 들어오지 않도록 [a-z0-9]만 남김
    ext = re.sub(r"[^a-z0-9]", "", original_name.split(".")[-1].lower())

    base = re.sub(r"\.[^/.]+\Z", "", original_name).lower()
    base = re.sub(r"[^a-z0-9]+", "-", base)
    base = base.strip("-")

    return f"{base}-{timestamp}-{suffix}.{ext}"


@dataclass(frozen=True)
class StoredImage:
    filename: str
    path: Path
    url: str


class ImageStore:
    """Flat directory of uploaded images, served under ``url_prefix``."""

    def __init__(self, directory: Path, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, original_name: str, data: bytes) -> StoredImage:
        filename = generate_safe_filename(original_name)
        path = self.directory / filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            logger.exception("Upload error: could not write %s", path)
            raise InternalIOError("Failed to upload file") from e

        logger.info("Stored upload %r -> %s (%d bytes)", original_name, path, len(data))
        return StoredImage(filename=filename, path=path.resolve(), url=f"{self.url_prefix}/{filename}")


def get_image_store(settings: Settings = Depends(get_settings)) -> ImageStore:
    return ImageStore(settings.upload_dir, settings.upload_url_prefix)
