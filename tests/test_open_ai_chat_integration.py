# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-22
# Updated: 2026-01-30
# Description: test_open_ai_chat_integration.py
# -----------------------------------------------------------------------------
import os

import pytest

from chat.OpenAIChat import OpenAIChat
from config.Config import Config


def _missing_openai_chat_env_vars() -> list[str]:
    """
    Env vars needed for a live chat call.
    Derived from Config.CHAT_ENV_VARS to avoid duplication.
    """
    return [name for name in Config.CHAT_ENV_VARS if not os.getenv(name)]


def _skip_if_missing_prereqs():
    missing = _missing_openai_chat_env_vars()
    if missing:
        pytest.skip(f"Missing env vars for OpenAI chat: {', '.join(missing)}")


@pytest.mark.integration
def test_openai_chat_simple_roundtrip():
    """
    Integration test:
      - instantiate OpenAIChat from env
      - send a tiny prompt
      - verify text is returned
    """
    _skip_if_missing_prereqs()

    cfg = Config.from_env()
    assert cfg.openai_api_key, "OPENAI_API_KEY must not be empty"
    assert cfg.chat_model, "BR_CHAT_MODEL must resolve to a model name"

    chat = OpenAIChat(cfg=cfg)
    answer = chat.complete(
        [
            {"role": "system", "content": "You are a test assistant."},
            {"role": "user", "content": "Reply with a single word: OK"},
        ],
        temperature=0.0,
        max_tokens=5,
    )

    assert answer.strip().strip(".").upper() == "OK"


@pytest.mark.integration
def test_openai_chat_healthcheck():
    """
    Light healthcheck integration test.
    """
    _skip_if_missing_prereqs()

    chat = OpenAIChat(cfg=Config.from_env())
    assert chat.healthcheck() is True
