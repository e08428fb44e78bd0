# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: query.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import Field, BaseModel


class QueryRequest(BaseModel):
    question: str = Field(..., min_length=1)
    top_k: int = Field(5, ge=1, le=50)
    include_text: bool = True


class QueryHit(BaseModel):
    chunk_id: int
    start_offset: int
    end_offset: int
    score: float
    text: Optional[str] = None


class QueryResponse(BaseModel):
    question: str
    source_id: str
    top_k: int
    results: List[QueryHit]
