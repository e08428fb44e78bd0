# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: index.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel, Field


class IndexRequest(BaseModel):
    text: Optional[str] = None
    # server-side path to a .txt / bugreport .zip; used when text is not given
    path: Optional[str] = None
    source_id: Optional[str] = None
    embedding_model: Optional[str] = None


class IndexResponse(BaseModel):
    source_id: str
    saved: bool
    path: Optional[str] = None
    model: str
    total_chunks: int
    indexed_chunks: int
    embeddings: int
    failed_chunks: int = 0
    split_chunks: int = 0
    complete: bool = True
    message: Optional[str] = Field(None, description="Why the index was not saved, if it wasn't")
