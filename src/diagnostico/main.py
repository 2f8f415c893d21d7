"""
Главный файл приложения FastAPI
Мастер диагностики, health check и базовая структура
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from diagnostico.config.settings import settings
from diagnostico.infrastructure.logging.hybrid_logger import hybrid_logger
from diagnostico.application.web.routes.diagnostico import router as diagnostico_router

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle события приложения"""
    # Startup
    await hybrid_logger.info("Запуск приложения Diagnóstico...")

    if settings.submission_configured:
        await hybrid_logger.info(f"Отправка формы на {settings.submit_url}")
    else:
        await hybrid_logger.warning("SUBMIT_URL не настроен, формы будут только логироваться")

    if not settings.privacy_url:
        await hybrid_logger.info("PRIVACY_URL не задан, политика конфиденциальности выводится текстом")

    yield

    # Shutdown
    await hybrid_logger.info("Завершение работы приложения")


# Создание FastAPI приложения
app = FastAPI(
    title="Diagnóstico",
    description="Multi-step lead qualification form for business software consulting",
    version=VERSION,
    debug=settings.debug,
    lifespan=lifespan
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Единый JSON формат ошибок"""
    if exc.status_code >= 500:
        await hybrid_logger.error(f"HTTP {exc.status_code} на {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )

# Middleware
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key or "change-me-in-production"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключение роутеров
app.include_router(diagnostico_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint для мониторинга
    """
    return JSONResponse(content={
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "version": VERSION,
        "environment": "development" if settings.debug else settings.environment,
        "components": {
            "submission": "configured" if settings.submission_configured else "simulation",
        }
    })


@app.get("/")
async def root():
    """Корневой endpoint"""
    return {
        "message": "Diagnóstico API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
        "wizard": "/diagnostico"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "diagnostico.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
