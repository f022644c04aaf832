import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.suggestions import router as suggestions_router
from app.core.config import settings
from app.core.db import engine
from app.core.errors import DocCollabError
from app.core.logging_setup import configure_logging
from app.db.base import init_models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Настройка логирования и создание таблиц при старте"""
    configure_logging(settings.log_level)
    if settings.auto_create_tables:
        await init_models(engine)
        logger.info("Database tables ensured")
    yield
    await engine.dispose()


app = FastAPI(
    title="DocCollab",
    description="Документы с историей версий и предложениями изменений",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DocCollabError)
async def doccollab_error_handler(request: Request, exc: DocCollabError) -> JSONResponse:
    """Перевод доменных ошибок в HTTP ответы"""
    if exc.status_code in (401, 403):
        logger.warning("%s %s refused: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(suggestions_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "DocCollab API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
