# src/minutes_analytics/main.py
"""
FastAPI application for the meeting-minutes analytics service.

Run locally:
    uvicorn minutes_analytics.main:app --reload --port 8001
"""

import logging

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI

from .config import get_config
from .core.container import container
from .domains.analytics import analytics_router

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Meeting Minutes Analytics", debug=config.debug)

app.include_router(analytics_router)


@app.get("/health")
async def health():
    """Liveness probe; does not touch the store."""
    return {
        "status": "ok",
        "environment": config.environment,
        "store_backend": container.backend,
    }


logger.info(f"Analytics API ready (env={config.environment}, store={container.backend})")
