
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from platesnap.config import Settings, get_settings
from platesnap.errors import ClientInputError
from platesnap.schemas.responses import AnalysisResult, AnalyzeRequest, ErrorResponse
from platesnap.services.analysis_service import analyze_image
from platesnap.utils.vision import ModelFactory, get_model_factory

router = APIRouter(prefix="/api", tags=["Analyze"])


@router.post(
    "/analyze",
    responses={
        200: {"model": AnalysisResult},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AnalyzeRequest.model_json_schema()}},
        }
    },
    summary="음식 이미지 분석",
)
async def analyze(
    request: Request,
    settings: Settings = Depends(get_settings),
    model_factory: ModelFactory = Depends(get_model_factory),
):
    try:
        body = await request.json()
    except ValueError:
        raise ClientInputError("Request body must be valid JSON")

    image_url = body.get("imageUrl") if isinstance(body, dict) else None
    result = await run_in_threadpool(analyze_image, image_url, settings, model_factory)
    # 검증을 통과한 모델 응답을 그대로 반환
    return JSONResponse(content=result)
