import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from platesnap.errors import ClientInputError
from platesnap.schemas.responses import ErrorResponse, UploadResponse
from platesnap.services.storage import ALLOWED_TYPES, ImageStore, get_image_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="이미지 업로드",
    description="""
multipart 폼의 `file` 필드 하나를 받아 업로드 디렉터리에 저장합니다.

- 허용 형식: PNG, JPG/JPEG, WEBP, GIF (Content-Type 기준)
- 응답의 `imageUrl` / `url` 은 같은 값(`/uploads/<파일명>`)
""",
)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="업로드할 이미지"),
    store: ImageStore = Depends(get_image_store),
):
    if file is None:
        logger.warning("Upload rejected: no file field")
        raise ClientInputError("No file provided")

    if file.content_type not in ALLOWED_TYPES:
        logger.warning("Upload rejected: %r has content type %r", file.filename, file.content_type)
        raise ClientInputError(
            "Invalid file type. Only PNG, JPG, JPEG, WEBP, and GIF images are allowed."
        )

    data = await file.read()
    stored = await run_in_threadpool(store.save, file.filename or "", data)
    return UploadResponse(imageUrl=stored.url, url=stored.url)
