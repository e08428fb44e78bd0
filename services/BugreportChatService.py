# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-29
# Description: BugreportChatService.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional, Sequence

import settings
from chat.CompletionProvider import CompletionProvider, Message
from chat.GroundedPrompt import build_grounded_prompt
from document.BugreportIndex import BugreportIndex
from document.ScoredChunk import ScoredChunk
from services.BugreportQueryService import BugreportQueryService
from utility.logging_utils import get_class_logger


class BugreportChatService:
    """
    Chat Service:
        - retrieves relevant chunks using BugreportQueryService
        - builds the citation-constrained prompt
        - calls the completion provider to generate an answer
        - returns answer + sources
    """

    system_prompt: str = (
        "You are an assistant helping engineers analyze Android bugreports.\n"
        "Answer in concise technical Markdown.\n"
    )

    def __init__(
        self,
        *,
        query_service: BugreportQueryService,
        completion: CompletionProvider,
        temperature: float = settings.ASK_DEFAULTS["temperature"],
        max_tokens: int = settings.ASK_DEFAULTS["max_tokens"],
        logger: logging.Logger | None = None,
    ) -> None:
        self.query_service = query_service
        self.completion = completion
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger or get_class_logger(self.__class__)

    def _complete(self, user_content: str) -> str:
        messages: List[Message] = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_content},
        ]
        return self.completion.complete(
            messages,
            json_mode=False,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    def ask(
        self,
        question: str,
        index: BugreportIndex,
        top_k: int = settings.ASK_DEFAULTS["top_k"],
    ) -> Dict[str, Any]:
        """
            Returns:
            {
                "question": str,
                "answer": str,
                "sources": [ {chunk_id, start_offset, end_offset, score, text}, ... ],
                "source_id": str,
                "model": str,
            }
        """
        q = (question or "").strip()
        if not q:
            raise ValueError("question must not be empty")

        self.logger.info("ask: query='%s' top_k=%d source=%r (start)", q[:120], top_k, index.source_id)

        scored = self.query_service.retrieve(q, index, top_k)
        prompt = build_grounded_prompt(q, scored, source_id=index.source_id)
        self.logger.debug("ask: prompt_chars=%d sources=%d", len(prompt), len(scored))

        answer = self._complete(prompt)
        self.logger.info("ask: answer_chars=%d (done)", len(answer))

        return {
            "question": q,
            "answer": answer,
            "sources": self.query_service.to_hits(scored),
            "scored_chunks": scored,
            "source_id": index.source_id,
            "model": index.model,
        }

    def ask_plain(self, question: str) -> str:
        """Same completion provider, no retrieval. Baseline for compare()."""
        q = (question or "").strip()
        if not q:
            raise ValueError("question must not be empty")
        return self._complete(q)

    def compare(
        self,
        question: str,
        index: BugreportIndex,
        top_k: int = settings.ASK_DEFAULTS["top_k"],
    ) -> Dict[str, Any]:
        plain = self.ask_plain(question)
        rag = self.ask(question, index, top_k)
        return {
            "question": rag["question"],
            "plain_answer": plain,
            "rag_answer": rag["answer"],
            "sources": rag["sources"],
        }

    @staticmethod
    def format_sources(
        scored: Sequence[ScoredChunk],
        source_id: Optional[str] = None,
        snippet_chars: int = 160,
    ) -> str:
        """Human-readable numbered source list matching the [n] citations."""
        if not scored:
            return "No chunks found for this query."

        lines = ["Sources:"]
        for i, s in enumerate(scored, start=1):
            c = s.chunk
            lines.append(
                f"[{i}] source={source_id or 'unknown'}, range={c.start_offset}-{c.end_offset}, score={s.score:.3f}"
            )
            snippet = c.text[:snippet_chars].replace("\n", " ")
            lines.append(f'   "{snippet}..."')
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"
