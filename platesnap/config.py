
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _origins(raw: str) -> Tuple[str, ...]:
    if not raw or raw.strip() == "*":
        return ("*",)
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    upload_dir: Path = Path("public") / "uploads"
    upload_url_prefix: str = "/uploads"
    public_base_url: Optional[str] = None
    fetch_timeout: float = 30.0
    model_timeout: float = 60.0
    front_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """
        환경변수(.env 포함)에서 설정을 읽는다.
        GEMINI_API_KEY 가 없어도 서버는 뜨고, /api/analyze 호출 시점에 500 으로 처리한다.
        """
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            upload_dir=Path(os.getenv("UPLOAD_DIR", str(Path("public") / "uploads"))),
            public_base_url=os.getenv("PUBLIC_BASE_URL") or None,
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", "30")),
            model_timeout=float(os.getenv("MODEL_TIMEOUT", "60")),
            front_origins=_origins(os.getenv("FRONT_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()
