# /promptforge/main.py

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Router Imports ---
from .routers import (
    generation_router,
    history_router,
    download_router,
)

from .core.config import CORS_ORIGINS
from .core.logging_config import setup_logging
from .db.database import init_db

setup_logging()


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="PromptForge API",
    description="Turns a natural-language prompt into a runnable multi-file project.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(generation_router.router, prefix="/api", tags=["Generation"])
app.include_router(history_router.router, prefix="/api", tags=["History"])
app.include_router(download_router.router, prefix="/api/download-project", tags=["Download"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "PromptForge is running!", "version": app.version}
