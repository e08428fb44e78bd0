# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Any, List, Optional

import openai
from openai import OpenAI

from chat.CompletionProvider import Message
from utility.errors import (
    AuthenticationMissing,
    MalformedResponse,
    ProviderUnavailable,
    RequestRejected,
)
from utility.logging_utils import get_class_logger


@dataclass
class OpenAIChat:
    """
        Chat completions through the OpenAI SDK. Works against api.openai.com or any
        OpenAI-compatible endpoint (OpenRouter, local gateways) via cfg.openai_base_url.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str
          cfg.chat_model: str  (e.g. "gpt-4o-mini", "x-ai/grok-4.1-fast")
    """

    cfg: Any
    logger: Any = None
    client: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if not getattr(self.cfg, "openai_api_key", None) and self.client is None:
            raise AuthenticationMissing("Config is missing OPENAI_API_KEY for chat completions")

        self.model = getattr(self.cfg, "chat_model", None)
        if not self.model:
            raise ValueError("Config missing chat_model for chat completions.")

        if self.client is None:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None) or None,
            )

        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.0,
            max_tokens: int = 1024,
            top_p: float = 1.0,
            seed: Optional[int] = None,
            response_format: Optional[Dict[str, Any]] = None,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
        }
        if seed is not None:
            params["seed"] = seed
        if response_format is not None:
            params["response_format"] = response_format
        if extra_params:
            params.update(extra_params)

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s top_p=%s",
            self.model, temperature, max_tokens, top_p
        )

        try:
            resp = self.client.chat.completions.create(**params)
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

        self.logger.debug("Raw ChatCompletion response: %r", resp)
        return resp

    def complete(
            self,
            messages: List[Message],
            json_mode: bool = False,
            **kwargs: Any,
    ) -> str:
        """CompletionProvider entry point: returns only the generated text."""
        if json_mode:
            kwargs.setdefault("response_format", {"type": "json_object"})

        resp = self.chat(messages, **kwargs)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise MalformedResponse(f"Unexpected chat response format: {e}") from e

        if not content.strip():
            raise MalformedResponse("Chat response contained no content")

        self.logger.info("Chat answer generated (model=%s chars=%d)", getattr(resp, "model", None), len(content))
        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return content

    def healthcheck(self) -> bool:
        try:
            _ = self.complete([{"role": "user", "content": "ping"}], max_tokens=5, temperature=0.0)
            return True
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
