# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: index router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_index_service
from api.errors import to_http_error
from api.schemas.index import IndexRequest, IndexResponse
from services.BugreportIndexService import BugreportIndexService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.post("", response_model=IndexResponse)
def post_index(
    req: IndexRequest,
    svc: BugreportIndexService = Depends(get_index_service),
) -> IndexResponse:
    if not (req.text and req.text.strip()) and not req.path:
        raise HTTPException(status_code=400, detail="either text or path must be provided")

    logger.info("POST /index (start) source_id=%r path=%r", req.source_id, req.path)

    try:
        if req.text and req.text.strip():
            result = svc.index_text(
                req.text,
                req.source_id or "bugreport",
                embedding_model=req.embedding_model,
            )
        else:
            text = svc.text_loader.load_text(req.path)
            result = svc.index_text(
                text,
                req.source_id or req.path,
                embedding_model=req.embedding_model,
            )
    except Exception as e:
        raise to_http_error(e, "indexing", logger)

    index, report = result.index, result.report
    message = None
    if not result.saved:
        if report.cancelled:
            message = "indexing timed out; index not saved"
        elif report.aborted:
            message = "too many chunks failed to embed; index not saved"
        else:
            message = "no chunk could be embedded; index not saved"

    logger.info("POST /index (done) saved=%s path=%s", result.saved, result.path)

    return IndexResponse(
        source_id=index.source_id,
        saved=result.saved,
        path=str(result.path) if result.path else None,
        model=index.model,
        total_chunks=report.total_chunks,
        indexed_chunks=len(index.chunks),
        embeddings=len(index.embeddings),
        failed_chunks=report.failed_chunks,
        split_chunks=report.split_chunks,
        complete=report.complete,
        message=message,
    )
