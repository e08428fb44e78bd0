# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from typing import Optional

from chat.CompletionProvider import CompletionProvider
from config.Config import Config
from embedding.BugreportIndexBuilder import BugreportIndexBuilder
from embedding.EmbeddingProvider import EmbeddingProvider
from services.BugreportChatService import BugreportChatService
from services.BugreportIndexService import BugreportIndexService
from services.BugreportQueryService import BugreportQueryService
from services.BugreportSummaryService import BugreportSummaryService
from services.ProviderRegistry import default_completion_registry, default_embedding_registry
from utility.logging_utils import get_class_logger
from vectorstore.JsonIndexStore import JsonIndexStore


class AppContainer:
    """
    Owns object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.

    Providers come from the registries; an unconfigured provider leaves the
    dependent services as None (routes answer 503) instead of failing startup.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Config: %r", self.cfg.summary())

        # Providers
        embedding = default_embedding_registry().resolve(self.cfg.embedding_provider, self.cfg)
        completion = default_completion_registry().resolve(self.cfg.completion_provider, self.cfg)
        self.embedding_provider: Optional[EmbeddingProvider] = embedding.provider
        self.completion_provider: Optional[CompletionProvider] = completion.provider
        self.embedding_unavailable_reason = embedding.reason
        self.completion_unavailable_reason = completion.reason

        # Storage
        self.store = JsonIndexStore()

        self.index_service: Optional[BugreportIndexService] = None
        self.query_service: Optional[BugreportQueryService] = None
        if self.embedding_provider is not None:
            self.index_service = BugreportIndexService(
                builder=BugreportIndexBuilder(self.embedding_provider),
                store=self.store,
                index_dir=self.cfg.index_dir,
                embedding_model=self.cfg.embedding_model,
            )
            self.query_service = BugreportQueryService(provider=self.embedding_provider)

        self.chat_service: Optional[BugreportChatService] = None
        self.summary_service: Optional[BugreportSummaryService] = None
        if self.completion_provider is not None:
            self.summary_service = BugreportSummaryService(completion=self.completion_provider)
            if self.query_service is not None:
                self.chat_service = BugreportChatService(
                    query_service=self.query_service,
                    completion=self.completion_provider,
                )


# Singleton container instance
app_container = AppContainer()
