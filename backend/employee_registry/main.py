from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_registry.api.v1.router import api_router
from employee_registry.core.config import settings
from employee_registry.services.draft_session import draft_session
from employee_registry.services.record_store import record_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        record_store.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize RecordStore, continuing with an empty in-memory list")
    draft_session.start_new()
    yield
    record_store.close()


app = FastAPI(
    title="Employee Registry API",
    description="Employee records with a draft form and local persistence",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Registry API"}
