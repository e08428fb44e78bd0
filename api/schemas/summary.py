# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: summary.py
# -----------------------------------------------------------------------------
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class SummaryRequest(BaseModel):
    text: str = Field(..., min_length=1)
    mode: Literal["multi_stage", "direct"] = "multi_stage"


class SegmentError(BaseModel):
    segment: int
    error: str


class SummaryResponse(BaseModel):
    mode: str
    summary: Optional[str] = None
    segment_errors: List[SegmentError] = Field(default_factory=list)
