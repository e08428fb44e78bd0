# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, HTTPException

from api.schemas.health import HealthResponse, IndexStatusResponse
from api.dependencies import get_index_service
from services.BugreportIndexService import BugreportIndexService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="Bugreport RAG API running")


@router.get("/index", response_model=IndexStatusResponse)
def index_status(
    svc: BugreportIndexService = Depends(get_index_service),
) -> IndexStatusResponse:
    path = svc.latest_path()
    index = svc.store.load(path) if path is not None else None
    if index is None:
        raise HTTPException(status_code=404, detail="No usable index found; build one first")

    logger.info("GET /health/index -> %s", path)
    return IndexStatusResponse(
        source_id=index.source_id,
        created_at=index.created_at,
        model=index.model,
        chunk_size=index.chunk_size,
        chunk_overlap=index.chunk_overlap,
        chunks=len(index.chunks),
        embeddings=len(index.embeddings),
        dimension=index.dimension,
        searchable=index.is_searchable,
        path=str(path),
    )
