import os
from typing import Optional

import requests
from dotenv import load_dotenv

load_dotenv()


def _get_base() -> str:
    """
    백엔드 베이스 URL 결정 우선순위:
    1) 환경변수 BACKEND_BASE
    2) Streamlit secrets["backend_base"]
    3) 기본값 "http://localhost:8000"
    """
    base = os.getenv("BACKEND_BASE")
    if base:
        return base.rstrip("/")

    try:
        import streamlit as st
        sec = getattr(st, "secrets", None)
        if sec:
            base = sec.get("backend_base")
            if base:
                return str(base).rstrip("/")
    except Exception:
        pass

    return "http://localhost:8000"


BASE = _get_base()


def _json_or_error(res: requests.Response) -> dict:
    """
    응답을 JSON으로 파싱해 dict로 반환.
    오류일 때는 백엔드와 같은 {"error": "..."} 형태로 통일.
    """
    try:
        data = res.json()
    except ValueError:
        return {"error": f"HTTP {res.status_code}: {res.text[:500]}"}

    if not res.ok:
        if isinstance(data, dict) and "error" in data:
            return {"error": str(data["error"])}
        return {"error": f"HTTP {res.status_code}: {data}"}
    return data


def public_url(path: str, base: Optional[str] = None) -> str:
    """/uploads/... 같은 상대 경로 → 브라우저/분석 API에서 쓸 수 있는 절대 URL"""
    if path.startswith(("http://", "https://")):
        return path
    return f"{(base or BASE).rstrip('/')}/{path.lstrip('/')}"


def upload_image(file_bytes: bytes, filename: str, mime_type: str) -> dict:
    """
    POST /api/upload (multipart, 필드명 file)
    성공: {"imageUrl": "/uploads/...", "url": "/uploads/..."}
    실패: {"error": "..."}
    """
    files = {"file": (filename, file_bytes, mime_type)}
    try:
        res = requests.post(f"{BASE}/api/upload", files=files, timeout=60)
    except requests.exceptions.RequestException as e:
        return {"error": f"Upload request failed: {e}"}
    return _json_or_error(res)


def analyze_image(image_url: str) -> dict:
    """
    POST /api/analyze  {"imageUrl": "..."}
    성공: {"items": [{"name": ..., "estimatedGrams": ...}, ...]}
    """
    try:
        res = requests.post(f"{BASE}/api/analyze", json={"imageUrl": image_url}, timeout=120)
    except requests.exceptions.RequestException as e:
        return {"error": f"Analyze request failed: {e}"}
    return _json_or_error(res)


__all__ = [
    "public_url",
    "upload_image",
    "analyze_image",
]
