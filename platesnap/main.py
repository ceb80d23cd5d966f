import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from platesnap.config import Settings, get_settings
from platesnap.errors import PlateSnapError
from platesnap.routes import analyze, upload

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="PlateSnap API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.front_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PlateSnapError)
    async def handle_platesnap_error(request: Request, exc: PlateSnapError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path,
                         exc.status_code, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        detail = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}"
            for e in exc.errors()
        )
        logger.warning("%s %s rejected: %s", request.method, request.url.path, detail)
        return _error(400, f"Invalid request: {detail}")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "An unexpected error occurred")

    app.include_router(upload.router)
    app.include_router(analyze.router)

    # StaticFiles 는 요청마다 디렉터리 존재를 확인 → 미리 생성
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=str(settings.upload_dir)),
        name="uploads",
    )

    @app.get("/")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run("platesnap.main:app", host=settings.host, port=settings.port)
