# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: errors.py
# -----------------------------------------------------------------------------
import logging

from fastapi import HTTPException

from utility.errors import (
    AuthenticationMissing,
    DimensionMismatch,
    ModelMismatch,
    ProviderError,
    ProviderUnavailable,
)


def to_http_error(e: Exception, what: str, logger: logging.Logger) -> HTTPException:
    """Map the project error taxonomy onto HTTP status codes."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, (ProviderUnavailable, AuthenticationMissing)):
        logger.warning("%s: provider unavailable: %s", what, e)
        return HTTPException(status_code=503, detail=f"{what} failed: {e}")
    if isinstance(e, ProviderError):
        logger.warning("%s: provider error: %s", what, e)
        return HTTPException(status_code=502, detail=f"{what} failed: {e}")
    if isinstance(e, (DimensionMismatch, ModelMismatch)):
        logger.error("%s: index/provider mismatch: %s", what, e)
        return HTTPException(status_code=409, detail=f"{what} failed: {e}")
    if isinstance(e, (ValueError, FileNotFoundError)):
        return HTTPException(status_code=400, detail=str(e))

    logger.exception("%s failed: %s", what, e)
    return HTTPException(status_code=500, detail=f"{what} failed: {e}")
