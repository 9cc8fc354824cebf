"""Standalone WhatsApp number service.

Runs separately from the main API, on its own port and its own store:

    uvicorn app.number_service.main:app --port 5000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.number_service.config import get_number_settings
from app.number_service.db import init_number_store
from app.number_service.router import router as whatsapp_router

settings = get_number_settings()

logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_number_store()
    logger.info("Number store ready")
    yield


app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(whatsapp_router, tags=["whatsapp"])


@app.get("/health", tags=["system"])
def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.number_service.main:app", host="0.0.0.0", port=settings.port)
