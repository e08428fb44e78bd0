# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-20
# Description: errors.py
# -----------------------------------------------------------------------------
"""
Error taxonomy shared by the indexing, retrieval and summary pipelines.

Provider errors (ProviderUnavailable, RequestRejected, AuthenticationMissing,
MalformedResponse) are raised by the embedding/completion adapters. The index
builder absorbs RequestRejected by splitting the chunk; everything else is left
to the caller.
"""


class BugreportRagError(Exception):
    """Base class for all errors raised by this project."""


class ProviderError(BugreportRagError):
    """Raised by an embedding or completion provider."""


class ProviderUnavailable(ProviderError):
    """Network failure, timeout or 5xx from the provider. Retryable by the caller."""


class RequestRejected(ProviderError):
    """The provider refused the input (malformed, too long, ...)."""


class AuthenticationMissing(ProviderError):
    """No API key configured, or the provider answered 401/403."""


class MalformedResponse(ProviderError):
    """The provider answered but the payload could not be interpreted."""


class DimensionMismatch(BugreportRagError, ValueError):
    """Two vectors of different length were compared."""


class ModelMismatch(BugreportRagError, ValueError):
    """A query was embedded with a different model than the index."""


class IndexCorrupt(BugreportRagError):
    """A persisted index file could not be read or parsed."""


class BuildCancelled(BugreportRagError):
    """Raised (or signalled) to stop an index build between chunks."""
