# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str


class IndexStatusResponse(BaseModel):
    source_id: str
    created_at: str
    model: str
    chunk_size: int
    chunk_overlap: int
    chunks: int
    embeddings: int
    dimension: int
    searchable: bool
    path: Optional[str] = None
