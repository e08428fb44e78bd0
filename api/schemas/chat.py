# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from api.schemas.query import QueryHit


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1)
    top_k: int = Field(5, ge=1, le=50)

    # rag: grounded answer; plain: no retrieval; compare: both
    mode: Literal["rag", "plain", "compare"] = "rag"


class ChatResponse(BaseModel):
    question: str
    mode: str
    answer: Optional[str] = None
    plain_answer: Optional[str] = None
    source_id: Optional[str] = None
    sources: List[QueryHit] = Field(default_factory=list)
    sources_text: Optional[str] = None
