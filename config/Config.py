# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-20
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from typing import Iterable, List

from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # Chat completions (OpenAI or any OpenAI-compatible endpoint, e.g. OpenRouter)
    openai_api_key: str
    openai_base_url: str
    chat_model: str
    completion_provider: str

    # Embeddings
    embedding_provider: str
    embedding_model: str
    ollama_base_url: str

    # Where index files live
    index_dir: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://openrouter.ai/api/v1
        "chat_model": "BR_CHAT_MODEL",
        "completion_provider": "BR_COMPLETION_PROVIDER",  # "openai" | "openrouter"

        "embedding_provider": "BR_EMBEDDING_PROVIDER",  # "ollama" | "openai"
        "embedding_model": "BR_EMBEDDING_MODEL",
        "ollama_base_url": "OLLAMA_BASE_URL",

        "index_dir": "BR_INDEX_DIR",
    }

    DEFAULTS = {
        "openai_base_url": "https://api.openai.com/v1",
        "chat_model": "gpt-4o-mini",
        "completion_provider": "openai",
        "embedding_provider": "ollama",
        "embedding_model": "nomic-embed-text",
        "ollama_base_url": "http://localhost:11434",
        "index_dir": "./data/indexes",
    }

    # Convenient *groups* for use in tests / health checks
    CHAT_ENV_VARS = (
        "OPENAI_API_KEY",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or Config.DEFAULTS.get(field_name, "")).strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def missing(self, fields: Iterable[str]) -> List[str]:
        """Env var names for the given fields that resolved to empty values."""
        return [self.ENV_VARS[f] for f in fields if not getattr(self, f)]

    def validate(self, fields: Iterable[str]) -> None:
        """
        Fail fast if any of the requested fields is missing.

        Not done in __post_init__: embedding-only runs against a local Ollama
        need no API key at all.
        """
        missing_env_vars = self.missing(fields)
        if missing_env_vars:
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url,
            "chat_model": self.chat_model,
            "completion_provider": self.completion_provider,
            "openai_api_key_set": bool(self.openai_api_key),
            "embedding_provider": self.embedding_provider,
            "embedding_model": self.embedding_model,
            "ollama_base_url": self.ollama_base_url,
            "index_dir": self.index_dir,
        }
