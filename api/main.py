# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: main.py
# -----------------------------------------------------------------------------
import logging
import os

from fastapi import FastAPI
from api.routers import health, index, query, chat, summary

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Bugreport RAG API")
app.include_router(health.router)
app.include_router(index.router)
app.include_router(query.router)
app.include_router(chat.router)
app.include_router(summary.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("BR_API_HOST", "127.0.0.1"),
        port=int(os.getenv("BR_API_PORT", "8000")),
        log_level="info",
        reload=False,
    )
