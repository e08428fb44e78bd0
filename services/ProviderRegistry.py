# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-28
# Description: ProviderRegistry.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from config.Config import Config
from utility.errors import ProviderError
from utility.logging_utils import get_class_logger

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

T = TypeVar("T")
ProviderFactory = Callable[[Config], T]


@dataclass(frozen=True)
class ProviderResolution(Generic[T]):
    """Either a provider instance or the reason there isn't one."""
    provider_id: str
    provider: Optional[T] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.provider is not None


@dataclass
class ProviderRegistry(Generic[T]):
    """
    Explicit provider-id -> factory map.

    resolve() never raises for an unknown id or a factory that cannot be
    configured; it returns a ProviderResolution with `reason` set instead.
    """
    kind: str
    factories: Dict[str, ProviderFactory] = field(default_factory=dict)
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def register(self, provider_id: str, factory: ProviderFactory) -> None:
        self.factories[provider_id.strip().lower()] = factory

    def known(self) -> list[str]:
        return sorted(self.factories)

    def resolve(self, provider_id: str, cfg: Config) -> ProviderResolution[T]:
        key = (provider_id or "").strip().lower()
        factory = self.factories.get(key)
        if factory is None:
            reason = f"{self.kind} provider {provider_id!r} is not configured (known: {self.known()})"
            self.logger.warning(reason)
            return ProviderResolution(provider_id=key, reason=reason)

        try:
            return ProviderResolution(provider_id=key, provider=factory(cfg))
        except (ValueError, ImportError, ProviderError) as e:
            reason = f"{self.kind} provider {provider_id!r} could not be created: {e}"
            self.logger.warning(reason)
            return ProviderResolution(provider_id=key, reason=reason)


def default_embedding_registry() -> "ProviderRegistry":
    from embedding.OllamaEmbeddingProvider import OllamaEmbeddingProvider
    from embedding.OpenAIEmbeddingProvider import OpenAIEmbeddingProvider

    registry: ProviderRegistry = ProviderRegistry(kind="embedding")
    registry.register("ollama", lambda cfg: OllamaEmbeddingProvider(cfg.ollama_base_url))
    registry.register(
        "openai",
        lambda cfg: OpenAIEmbeddingProvider(cfg.openai_api_key, base_url=cfg.openai_base_url),
    )
    return registry


def _openrouter_config(cfg: Config) -> Config:
    """OpenRouter speaks the OpenAI protocol; keep an explicit base URL, else point at OpenRouter."""
    if cfg.openai_base_url and cfg.openai_base_url != Config.DEFAULTS["openai_base_url"]:
        return cfg
    return replace(cfg, openai_base_url=OPENROUTER_BASE_URL)


def default_completion_registry() -> "ProviderRegistry":
    from chat.OpenAIChat import OpenAIChat

    registry: ProviderRegistry = ProviderRegistry(kind="completion")
    registry.register("openai", lambda cfg: OpenAIChat(cfg=cfg))
    registry.register("openrouter", lambda cfg: OpenAIChat(cfg=_openrouter_config(cfg)))
    return registry
