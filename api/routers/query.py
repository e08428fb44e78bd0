# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: query router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_index_service, get_query_service
from api.errors import to_http_error
from api.schemas.query import QueryRequest, QueryResponse, QueryHit
from services.BugreportIndexService import BugreportIndexService
from services.BugreportQueryService import BugreportQueryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/query", tags=["query"])


@router.post("", response_model=QueryResponse)
def post_query(
    req: QueryRequest,
    svc: BugreportQueryService = Depends(get_query_service),
    index_svc: BugreportIndexService = Depends(get_index_service),
) -> QueryResponse:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="question must not be empty")

    index = index_svc.load_latest()
    if index is None:
        raise HTTPException(status_code=404, detail="No bugreport index found; build one first")

    try:
        scored = svc.retrieve(question, index, req.top_k)
    except Exception as e:
        raise to_http_error(e, "query", logger)

    hits = [QueryHit(**h) for h in svc.to_hits(scored, include_text=req.include_text)]

    return QueryResponse(
        question=question,
        source_id=index.source_id,
        top_k=req.top_k,
        results=hits,
    )
