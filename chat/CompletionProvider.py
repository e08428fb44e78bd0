# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: CompletionProvider
# -----------------------------------------------------------------------------
from typing import Dict, List, Protocol, runtime_checkable

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@runtime_checkable
class CompletionProvider(Protocol):
    """
    Role-tagged messages in, generated text out.

    Raises ProviderUnavailable, AuthenticationMissing or MalformedResponse
    (utility.errors) on failure.
    """

    def complete(self, messages: List[Message], json_mode: bool = False, **kwargs) -> str:
        ...
