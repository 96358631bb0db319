# selfer/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from selfer import __version__
from selfer.config import settings
from selfer.middleware.cors import setup_cors
from selfer.routers import channels, health, topics
from selfer.utils.error_codes import ErrorCodes
from selfer.utils.logging_helper import setup_logging
from selfer.utils.response import error_response, to_json_response

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # postgres 모드: KV 테이블이 없으면 생성
    if settings.repo_backend == "postgres":
        from selfer.db.db_session import SessionLocal
        from selfer.repositories.postgres.channel_store import create_table
        with SessionLocal() as db:
            create_table(db)
    logger.info(f"Selfer API 시작 (repo_backend={settings.repo_backend})")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Selfer Icebreaker API",
    description="채널 생성/참가 및 AI 아이스브레이킹 토픽 API",
    version=__version__,
    redirect_slashes=False,
)

setup_cors(app)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"요청 검증 실패: {request.url.path} {exc.errors()}")
    return to_json_response(error_response(
        message="Invalid request",
        error_code=ErrorCodes.VALIDATION_ERROR,
        status_code=422,
    ))


# ======================
# API routers
# ======================
app.include_router(health.router, prefix="/api")
app.include_router(channels.router, prefix="/api")
app.include_router(topics.router, prefix="/api")


def run() -> None:
    import uvicorn
    uvicorn.run("selfer.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
