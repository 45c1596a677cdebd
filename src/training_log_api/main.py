"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from training_log_api.api.routes import router
from training_log_api.config import settings

logging.getLogger("training_log_api").setLevel(settings.LOG_LEVEL)

app = FastAPI(title="Training Log API")

# Configure CORS to allow requests from the editor UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
