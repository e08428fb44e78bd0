# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: dependencies.py
# -----------------------------------------------------------------------------
from fastapi import HTTPException

from api.AppContainer import app_container
from services.BugreportChatService import BugreportChatService
from services.BugreportIndexService import BugreportIndexService
from services.BugreportQueryService import BugreportQueryService
from services.BugreportSummaryService import BugreportSummaryService


def _unavailable(what: str, reason: str | None) -> HTTPException:
    return HTTPException(status_code=503, detail=f"{what} unavailable: {reason or 'not configured'}")


def get_index_service() -> BugreportIndexService:
    # use the singleton service from the container
    if app_container.index_service is None:
        raise _unavailable("indexing", app_container.embedding_unavailable_reason)
    return app_container.index_service


def get_query_service() -> BugreportQueryService:
    if app_container.query_service is None:
        raise _unavailable("retrieval", app_container.embedding_unavailable_reason)
    return app_container.query_service


def get_chat_service() -> BugreportChatService:
    if app_container.chat_service is None:
        reason = app_container.completion_unavailable_reason or app_container.embedding_unavailable_reason
        raise _unavailable("chat", reason)
    return app_container.chat_service


def get_summary_service() -> BugreportSummaryService:
    if app_container.summary_service is None:
        raise _unavailable("summary", app_container.completion_unavailable_reason)
    return app_container.summary_service
