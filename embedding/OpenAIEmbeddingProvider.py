# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: OpenAIEmbeddingProvider
# -----------------------------------------------------------------------------
import time
from typing import List, Optional

import openai
from openai import OpenAI

from utility.errors import (
    AuthenticationMissing,
    MalformedResponse,
    ProviderUnavailable,
    RequestRejected,
)
from utility.logging_utils import get_class_logger


class OpenAIEmbeddingProvider:
    """Embeddings through the OpenAI SDK (OpenAI or any compatible base_url)."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: Optional[str] = None,
        max_retries: int = 3,
        client: Optional[OpenAI] = None,
        logger=None,
    ):
        self.logger = logger or get_class_logger(self.__class__)
        if client is None and not api_key:
            raise AuthenticationMissing("OPENAI_API_KEY is required for OpenAI embeddings")

        self.client = client or OpenAI(api_key=api_key, base_url=base_url or None)
        self.max_retries = max(1, max_retries)
        self.logger.info("OpenAIEmbeddingProvider initialised (base_url=%s)", base_url or "default")

    def _create_once(self, text: str, model: str) -> List[float]:
        try:
            resp = self.client.embeddings.create(model=model, input=[text])
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthenticationMissing(str(e)) from e
        except openai.BadRequestError as e:
            raise RequestRejected(str(e)) from e
        except (openai.APIConnectionError, openai.RateLimitError, openai.InternalServerError) as e:
            raise ProviderUnavailable(str(e)) from e
        except openai.APIStatusError as e:
            # 404 / 413 / 422 and anything else the SDK has no subclass for
            if 400 <= e.status_code < 500:
                raise RequestRejected(str(e)) from e
            raise ProviderUnavailable(str(e)) from e

        try:
            return [float(x) for x in resp.data[0].embedding]
        except (AttributeError, IndexError, TypeError, ValueError) as e:
            raise MalformedResponse(f"Unexpected embeddings response: {e}") from e

    def embed(self, text: str, model: str) -> List[float]:
        delay = 0.8
        for attempt in range(1, self.max_retries + 1):
            try:
                return self._create_once(text, model)
            except ProviderUnavailable as e:
                self.logger.warning("Embedding request failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise
                time.sleep(delay)
                delay *= 1.7  # backoff

        raise ProviderUnavailable("OpenAI embedding retries exhausted")
