# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: chat.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_chat_service, get_index_service
from api.errors import to_http_error
from api.schemas.chat import ChatRequest, ChatResponse
from api.schemas.query import QueryHit
from services.BugreportChatService import BugreportChatService
from services.BugreportIndexService import BugreportIndexService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def post_chat(
        req: ChatRequest,
        svc: BugreportChatService = Depends(get_chat_service),
        index_svc: BugreportIndexService = Depends(get_index_service),
) -> ChatResponse:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="question must not be empty")

    logger.info("POST /chat (start) question_len=%d top_k=%d mode=%s", len(question), req.top_k, req.mode)

    if req.mode == "plain":
        try:
            answer = svc.ask_plain(question)
        except Exception as e:
            raise to_http_error(e, "chat", logger)
        return ChatResponse(question=question, mode=req.mode, answer=answer)

    index = index_svc.load_latest()
    if index is None:
        raise HTTPException(status_code=404, detail="No bugreport index found; build one first")

    try:
        if req.mode == "compare":
            out: Dict[str, Any] = svc.compare(question, index, req.top_k)
            answer, plain = out["rag_answer"], out["plain_answer"]
            rag = None
        else:
            rag = svc.ask(question, index, req.top_k)
            out, answer, plain = rag, rag["answer"], None
    except Exception as e:
        raise to_http_error(e, "chat", logger)

    sources = [QueryHit(**s) for s in out.get("sources", []) or []]
    sources_text = (
        svc.format_sources(rag["scored_chunks"], source_id=index.source_id) if rag is not None else None
    )

    logger.info("POST /chat (done) answer_len=%d sources=%d", len(answer or ""), len(sources))

    return ChatResponse(
        question=question,
        mode=req.mode,
        answer=answer,
        plain_answer=plain,
        source_id=index.source_id,
        sources=sources,
        sources_text=sources_text,
    )
