# foreverr/main.py
import os

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from foreverr import __version__
from foreverr.api import (
    ai,
    badges,
    letters,
    living_tributes,
    memorials,
    moderation,
    notifications,
    points,
    profiles,
    scrapbook,
    tributes,
    vault
)
from foreverr.config import settings
from foreverr.models import close_db, init_db
from foreverr.services.scheduler_service import scheduler_service
from foreverr.utils.exceptions import ForeverrError, foreverr_error_handler, validation_exception_handler
from foreverr.utils.logger import setup_logger

logger = setup_logger()

app = FastAPI(
    title="Foreverr API",
    description="Memorial pages, tributes, legacy letters and AI writing tools",
    version=__version__,
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ForeverrError, foreverr_error_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.on_event("startup")
async def startup_event():
    logger.info(" Foreverr API starting")
    logger.info(f" Debug mode: {settings.debug}")

    try:
        await init_db()
    except Exception as e:
        logger.warning(f" Database init failed: {e}")

    if settings.scheduler_enabled:
        scheduler_service.start()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(" Foreverr API shutting down")
    if settings.scheduler_enabled:
        scheduler_service.stop()
    await close_db()


# media directory must exist before mounting
os.makedirs(settings.media_dir, exist_ok=True)

app.include_router(profiles.router, prefix="/api")
app.include_router(memorials.router, prefix="/api")
app.include_router(tributes.router, prefix="/api")
app.include_router(living_tributes.router, prefix="/api")
app.include_router(letters.router, prefix="/api")
app.include_router(vault.router, prefix="/api")
app.include_router(scrapbook.router, prefix="/api")
app.include_router(ai.router, prefix="/api")
app.include_router(moderation.router, prefix="/api")
app.include_router(points.router, prefix="/api")
app.include_router(badges.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")

app.mount("/static", StaticFiles(directory=settings.media_dir), name="static")


@app.get("/")
async def root():
    return {
        "service": "Foreverr API",
        "version": __version__,
        "status": "running",
        "features": [
            "Memorials and tribute walls",
            "Living tributes",
            "Legacy letters",
            "Memory vault and time capsules",
            "Scrapbooks",
            "AI obituary, biography and tribute writing",
            "Photo restoration, memorial video and voice",
            "Legacy points and badges"
        ]
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "database": settings.sqlalchemy_url.split("://", 1)[0],
        "scheduler": {
            "enabled": settings.scheduler_enabled,
            "running": scheduler_service.scheduler.running
        },
        "ai_providers": {
            "openai": bool(settings.openai_api_key),
            "huggingface": bool(settings.huggingface_token),
            "elevenlabs": bool(settings.elevenlabs_api_key)
        },
        "auto_moderation": settings.auto_moderation
    }


if __name__ == "__main__":
    uvicorn.run(
        "foreverr.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
