# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-30
# Description: test_providers.py
# -----------------------------------------------------------------------------
from types import SimpleNamespace

import httpx
import openai
import pytest
import requests

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.BugreportIndexBuilder import BugreportIndexBuilder
from embedding.OllamaEmbeddingProvider import OllamaEmbeddingProvider
from embedding.OpenAIEmbeddingProvider import OpenAIEmbeddingProvider
from services.ProviderRegistry import ProviderRegistry, default_completion_registry, default_embedding_registry
from utility.errors import (
    AuthenticationMissing,
    MalformedResponse,
    ProviderUnavailable,
    RequestRejected,
)


def _cfg(**overrides) -> Config:
    values = dict(
        openai_api_key="",
        openai_base_url="https://api.openai.com/v1",
        chat_model="gpt-4o-mini",
        completion_provider="openai",
        embedding_provider="ollama",
        embedding_model="nomic-embed-text",
        ollama_base_url="http://localhost:11434",
        index_dir="./data/indexes",
    )
    values.update(overrides)
    return Config(**values)


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda _s: None)


# ---------------------------------------------------------------------------
# Ollama
# ---------------------------------------------------------------------------
class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def test_ollama_posts_model_and_prompt():
    session = FakeSession(FakeResponse(payload={"embedding": [1, 2.5, -3]}))
    provider = OllamaEmbeddingProvider("http://ollama:11434/", session=session)

    assert provider.embed("ANR in com.app", "nomic-embed-text") == [1.0, 2.5, -3.0]
    assert session.posts == [
        ("http://ollama:11434/api/embeddings", {"model": "nomic-embed-text", "prompt": "ANR in com.app"})
    ]


@pytest.mark.parametrize(
    "response, error",
    [
        (FakeResponse(401), AuthenticationMissing),
        (FakeResponse(400, text="input too long"), RequestRejected),
        (FakeResponse(payload=ValueError("not json"), text="<html>"), MalformedResponse),
        (FakeResponse(payload={"embeddings": []}), MalformedResponse),
        (FakeResponse(payload={"embedding": ["a"]}), MalformedResponse),
    ],
)
def test_ollama_error_mapping(response, error):
    provider = OllamaEmbeddingProvider(session=FakeSession(response))
    with pytest.raises(error):
        provider.embed("x", "m")


def test_ollama_retries_when_unavailable():
    session = FakeSession(
        requests.ConnectionError("refused"),
        FakeResponse(503, text="loading model"),
        FakeResponse(payload={"embedding": [0.5]}),
    )
    provider = OllamaEmbeddingProvider(session=session, max_retries=3)

    assert provider.embed("x", "m") == [0.5]
    assert len(session.posts) == 3


def test_ollama_gives_up_after_retries():
    session = FakeSession(*[FakeResponse(500) for _ in range(2)])
    provider = OllamaEmbeddingProvider(session=session, max_retries=2)
    with pytest.raises(ProviderUnavailable):
        provider.embed("x", "m")


def test_ollama_does_not_retry_rejections():
    session = FakeSession(FakeResponse(413), FakeResponse(payload={"embedding": [1.0]}))
    with pytest.raises(RequestRejected):
        OllamaEmbeddingProvider(session=session).embed("x", "m")
    assert len(session.posts) == 1


# ---------------------------------------------------------------------------
# OpenAI embeddings / chat (fake clients)
# ---------------------------------------------------------------------------
class FakeEmbeddingsApi:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        item = self.outcomes.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/embeddings"))


def test_openai_embedding_requires_key():
    with pytest.raises(AuthenticationMissing):
        OpenAIEmbeddingProvider("")


def test_openai_embedding_uses_sdk_and_retries():
    api = FakeEmbeddingsApi(
        _connection_error(),
        SimpleNamespace(data=[SimpleNamespace(embedding=[0.1, 0.2])]),
    )
    provider = OpenAIEmbeddingProvider("", client=SimpleNamespace(embeddings=api))

    assert provider.embed("text", "text-embedding-3-small") == [0.1, 0.2]
    assert api.calls[-1] == {"model": "text-embedding-3-small", "input": ["text"]}
    assert len(api.calls) == 2


def test_openai_embedding_malformed_response():
    api = FakeEmbeddingsApi(SimpleNamespace(data=[]))
    provider = OpenAIEmbeddingProvider("", client=SimpleNamespace(embeddings=api))
    with pytest.raises(MalformedResponse):
        provider.embed("text", "m")


def _chat_client(content):
    api = FakeEmbeddingsApi(
        SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
            model="gpt-4o-mini",
            usage=None,
        )
    )
    return api, SimpleNamespace(chat=SimpleNamespace(completions=api))


def test_openai_chat_complete_returns_text():
    api, client = _chat_client("ANR caused by main thread I/O [1]")
    chat = OpenAIChat(cfg=_cfg(), client=client)

    answer = chat.complete([{"role": "user", "content": "why?"}], json_mode=True, temperature=0.0, max_tokens=50)

    assert answer == "ANR caused by main thread I/O [1]"
    sent = api.calls[0]
    assert sent["model"] == "gpt-4o-mini"
    assert sent["response_format"] == {"type": "json_object"}
    assert sent["max_tokens"] == 50


def test_openai_chat_empty_content_is_malformed():
    _, client = _chat_client("  ")
    with pytest.raises(MalformedResponse):
        OpenAIChat(cfg=_cfg(), client=client).complete([{"role": "user", "content": "q"}])


def test_openai_chat_requires_key_without_client():
    with pytest.raises(AuthenticationMissing):
        OpenAIChat(cfg=_cfg(openai_api_key=""))


# ---------------------------------------------------------------------------
# Registry / config
# ---------------------------------------------------------------------------
def test_registry_unknown_provider_gives_reason():
    resolution = default_embedding_registry().resolve("cohere", _cfg())
    assert not resolution.ok
    assert "cohere" in resolution.reason
    assert "ollama" in resolution.reason


def test_registry_resolves_ollama_case_insensitively():
    resolution = default_embedding_registry().resolve(" Ollama ", _cfg(ollama_base_url="http://gpu-box:11434"))
    assert resolution.ok
    assert resolution.provider.endpoint == "http://gpu-box:11434/api/embeddings"


def test_registry_factory_failure_gives_reason():
    resolution = default_completion_registry().resolve("openai", _cfg(openai_api_key=""))
    assert not resolution.ok
    assert "OPENAI_API_KEY" in resolution.reason


def test_registry_custom_factory():
    registry = ProviderRegistry(kind="embedding")
    registry.register("Fake", lambda cfg: "fake-provider")
    assert registry.known() == ["fake"]
    assert registry.resolve("fake", _cfg()).provider == "fake-provider"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("BR_EMBEDDING_PROVIDER", "openai")
    monkeypatch.delenv("BR_CHAT_MODEL", raising=False)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    cfg = Config.from_env()

    assert cfg.embedding_provider == "openai"
    assert cfg.chat_model == "gpt-4o-mini"
    assert cfg.missing(["openai_api_key", "chat_model"]) == []
    assert cfg.summary()["openai_api_key_set"] is True
    assert "sk-test" not in str(cfg.summary())


def test_config_validate_names_missing_env_vars():
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        _cfg(openai_api_key="").validate(["openai_api_key"])


# ---------------------------------------------------------------------------
# Status codes the SDK has no dedicated exception class for
# ---------------------------------------------------------------------------
def _status_error(status: int, message: str = "payload too large") -> openai.APIStatusError:
    request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
    return openai.APIStatusError(message, response=httpx.Response(status, request=request), body=None)


@pytest.mark.parametrize(
    "status, error",
    [(413, RequestRejected), (422, RequestRejected), (404, RequestRejected), (502, ProviderUnavailable)],
)
def test_openai_embedding_maps_other_status_codes(status, error):
    api = FakeEmbeddingsApi(*[_status_error(status) for _ in range(3)])
    provider = OpenAIEmbeddingProvider("", client=SimpleNamespace(embeddings=api))
    with pytest.raises(error):
        provider.embed("text", "m")


@pytest.mark.parametrize("status, error", [(413, RequestRejected), (503, ProviderUnavailable)])
def test_openai_chat_maps_other_status_codes(status, error):
    api = FakeEmbeddingsApi(_status_error(status))
    chat = OpenAIChat(cfg=_cfg(), client=SimpleNamespace(chat=SimpleNamespace(completions=api)))
    with pytest.raises(error):
        chat.complete([{"role": "user", "content": "q"}])


def test_payload_too_large_is_split_during_build():
    class SizeLimitedEmbeddings:
        def __init__(self):
            self.calls = []

        def create(self, model, input):
            self.calls.append(input[0])
            if len(input[0]) > 300:
                raise _status_error(413)
            return SimpleNamespace(data=[SimpleNamespace(embedding=[1.0, float(len(input[0]))])])

    api = SizeLimitedEmbeddings()
    provider = OpenAIEmbeddingProvider("", client=SimpleNamespace(embeddings=api))
    builder = BugreportIndexBuilder(provider, chunk_size=600, chunk_overlap=0, min_split_chars=50)

    index, report = builder.build_with_report("hello world " * 100, "src", "m")

    assert report.complete
    assert report.failed_chunks == 0
    assert report.split_chunks >= 1
    assert index.is_searchable
    assert all(len(c.text) <= 300 for c in index.chunks)


def test_openrouter_defaults_to_openrouter_base_url():
    from services.ProviderRegistry import OPENROUTER_BASE_URL

    resolution = default_completion_registry().resolve("openrouter", _cfg(openai_api_key="sk-test"))

    assert resolution.ok
    assert resolution.provider.cfg.openai_base_url == OPENROUTER_BASE_URL


def test_openrouter_keeps_explicit_base_url():
    cfg = _cfg(openai_api_key="sk-test", openai_base_url="http://gateway.local/v1")
    resolution = default_completion_registry().resolve("openrouter", cfg)
    assert resolution.provider.cfg.openai_base_url == "http://gateway.local/v1"
