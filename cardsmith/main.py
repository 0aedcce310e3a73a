"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cardsmith.api.routes import router
from cardsmith.config import get_settings
from cardsmith.logging_config import setup_logging
from cardsmith.pipeline import FlashcardPipeline

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("starting cardsmith service")

    app.state.settings = settings
    app.state.pipeline = FlashcardPipeline(settings)

    logger.info(
        "cardsmith service ready",
        extra={
            "model": settings.agent_model,
            "anki_connect_url": settings.anki_connect_url,
            "default_deck": settings.default_deck,
        },
    )

    yield

    logger.info("shutting down cardsmith service")


app = FastAPI(title="Cardsmith", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
