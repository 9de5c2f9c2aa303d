import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .bot_app import start_bot_in_background
from .routers import router
from .settings import settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Student bot service starting")
    if settings.RUN_TELEGRAM_BOT:
        start_bot_in_background()
    else:
        logger.info("RUN_TELEGRAM_BOT is off, serving HTTP API only")
    logger.info("Available endpoints:")
    logger.info("  • POST /api/student_bot/ - process a message")
    logger.info("  • GET /api/student_bot/status - service status")

    yield

    logger.info("🛑 Student bot service stopped")


app = FastAPI(
    title="Student Bot Service",
    description="Student support bot with session gate and rate limiting",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "message": "Student bot service is running",
        "service": "student_bot",
        "version": "1.0.0"
    }


def main():
    uvicorn.run(
        "student_bot.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        log_level="info",
    )


if __name__ == "__main__":
    main()
