# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: summary router
# -----------------------------------------------------------------------------
import logging
from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_summary_service
from api.errors import to_http_error
from api.schemas.summary import SegmentError, SummaryRequest, SummaryResponse
from services.BugreportSummaryService import BugreportSummaryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summary", tags=["summary"])


@router.post("", response_model=SummaryResponse)
def post_summary(
    req: SummaryRequest,
    svc: BugreportSummaryService = Depends(get_summary_service),
) -> SummaryResponse:
    errors: List[SegmentError] = []

    def _on_chunk_error(i: int, exc: Exception) -> None:
        errors.append(SegmentError(segment=i, error=f"{type(exc).__name__}: {exc}"))

    logger.info("POST /summary (start) chars=%d mode=%s", len(req.text), req.mode)
    try:
        if req.mode == "direct":
            summary = svc.summarize_direct(req.text)
        else:
            summary = svc.summarize(req.text, on_chunk_error=_on_chunk_error)
    except Exception as e:
        raise to_http_error(e, "summary", logger)

    logger.info("POST /summary (done) produced=%s segment_errors=%d", summary is not None, len(errors))
    return SummaryResponse(mode=req.mode, summary=summary, segment_errors=errors)
