# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: EmbeddingProvider
# -----------------------------------------------------------------------------
from typing import List, Protocol, runtime_checkable


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Turns one text into one vector.

    Raises utility.errors.ProviderUnavailable when the endpoint is down and
    utility.errors.RequestRejected when the input is refused (typically too long).
    """

    def embed(self, text: str, model: str) -> List[float]:
        ...
