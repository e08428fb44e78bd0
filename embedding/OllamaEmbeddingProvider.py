# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: OllamaEmbeddingProvider
# -----------------------------------------------------------------------------
import time
from typing import List

import requests

from utility.errors import (
    AuthenticationMissing,
    MalformedResponse,
    ProviderUnavailable,
    RequestRejected,
)
from utility.logging_utils import get_class_logger


class OllamaEmbeddingProvider:
    """
    Embeddings through a local Ollama server, one request per text:

        POST {base_url}/api/embeddings  {"model": "...", "prompt": "..."}
        ->   {"embedding": [...]}
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        *,
        timeout: float = 60.0,
        max_retries: int = 3,
        session: requests.Session | None = None,
        logger=None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.session = session or requests.Session()
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info("OllamaEmbeddingProvider initialised (base_url=%s)", self.base_url)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/embeddings"

    def _post_once(self, text: str, model: str) -> List[float]:
        try:
            resp = self.session.post(
                self.endpoint,
                json={"model": model, "prompt": text},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ProviderUnavailable(f"Ollama request failed: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationMissing(f"Ollama refused credentials: status {resp.status_code}")
        if 400 <= resp.status_code < 500:
            raise RequestRejected(f"Ollama rejected input: status {resp.status_code}, body={resp.text[:200]}")
        if resp.status_code >= 500:
            raise ProviderUnavailable(f"Ollama error: status {resp.status_code}, body={resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResponse(f"Ollama returned non-JSON body: {resp.text[:200]}") from e

        embedding = payload.get("embedding") if isinstance(payload, dict) else None
        if not isinstance(embedding, list):
            raise MalformedResponse("Ollama embeddings response missing 'embedding' field")

        try:
            return [float(x) for x in embedding]
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"Non-numeric value in embedding: {e}") from e

    def embed(self, text: str, model: str) -> List[float]:
        delay = 0.8
        for attempt in range(1, self.max_retries + 1):
            try:
                return self._post_once(text, model)
            except ProviderUnavailable as e:
                self.logger.warning("Embedding request failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise
                time.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        raise ProviderUnavailable("Ollama embedding retries exhausted")
