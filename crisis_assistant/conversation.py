"""Conversation session management for the crisis assistant."""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, Optional, Sequence

from .errors import (
    CONNECTION_APOLOGY,
    CONNECTION_APOLOGY_QUICK_REPLIES,
    FAILURE_QUICK_REPLIES,
    fallback_message,
)
from .models import ConversationContext, Message
from .prompts import GREETING_QUICK_REPLIES, build_greeting
from .types import ChatContext, ChatHistoryEntry, ChatRequest, ReasoningClient, SourceCitation

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_ARTICLE_TITLE = "Crisis Article"

_CONTEXT_FIELDS = frozenset(f.name for f in dataclasses.fields(ConversationContext))


class ConversationAgent:
    """Keeps one user's dialogue about a crisis article.

    Two histories are kept over the same turns: the unbounded transcript of
    ``Message`` objects shown to the user, and a bounded list of
    user/model exchanges sent back to the reasoning backend for continuity.
    ``process_message`` never raises; backend failures become apology
    messages steering the user toward the matched organizations.
    """

    def __init__(
        self,
        context: ConversationContext,
        client: ReasoningClient,
        enable_web_search: bool = False,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        if history_limit < 2:
            raise ValueError("history_limit must hold at least one exchange")
        self.context = context
        self.client = client
        self.history_limit = history_limit
        self._enable_web_search = enable_web_search
        self._transcript: List[Message] = []
        self._backend_history: List[ChatHistoryEntry] = []

    def set_web_search_enabled(self, enabled: bool) -> None:
        self._enable_web_search = enabled

    def is_web_search_enabled(self) -> bool:
        return self._enable_web_search

    def get_greeting(self) -> Message:
        """Opening message for the current context; the transcript is untouched."""
        return Message(
            role="agent",
            content=build_greeting(self.context.classification),
            quick_replies=GREETING_QUICK_REPLIES,
        )

    def record_greeting(self) -> Message:
        greeting = self.get_greeting()
        self._transcript.append(greeting)
        return greeting

    def get_history(self) -> List[Message]:
        return list(self._transcript)

    def get_backend_history(self) -> List[ChatHistoryEntry]:
        return [dict(entry) for entry in self._backend_history]  # type: ignore[misc]

    def update_context(self, **updates: Any) -> None:
        """Merge fields into the context; ``None`` values keep the prior value."""
        unknown = set(updates) - _CONTEXT_FIELDS
        if unknown:
            raise TypeError(f"Unknown context field(s): {', '.join(sorted(unknown))}")
        changes = {name: value for name, value in updates.items() if value is not None}
        self.context = dataclasses.replace(self.context, **changes)

    def _build_chat_context(self) -> ChatContext:
        ctx = self.context
        classification = ctx.classification
        chat_context: ChatContext = {
            "articleTitle": ctx.article_title or classification.article_title or DEFAULT_ARTICLE_TITLE,
            "articleText": ctx.article_text or classification.article_text or ctx.article_summary,
            "articleSummary": ctx.article_summary,
            "classification": {
                "cause": classification.cause,
                "geoName": classification.geo_name,
                "severity": classification.severity,
                "identified_needs": list(classification.identified_needs),
                "affectedGroups": list(classification.affected_groups),
            },
            "matchedCharities": [
                {"name": c.name, "description": c.description, "trustScore": c.trust_score}
                for c in ctx.matched_charities
            ],
        }
        article_url = ctx.article_url or classification.article_url
        if article_url:
            chat_context["articleUrl"] = article_url
        return chat_context

    def build_request(self, user_message: str) -> ChatRequest:
        return {
            "message": user_message,
            "context": self._build_chat_context(),
            "history": self.get_backend_history(),
            "enableWebSearch": self._enable_web_search,
        }

    def _remember_exchange(self, user_message: str, reply: str) -> None:
        self._backend_history.append({"role": "user", "content": user_message})
        self._backend_history.append({"role": "model", "content": reply})
        if len(self._backend_history) > self.history_limit:
            self._backend_history = self._backend_history[-self.history_limit:]

    def _append_agent_message(
        self,
        content: str,
        quick_replies: Sequence[str] = (),
        sources: Sequence[SourceCitation] = (),
    ) -> Message:
        message = Message(
            role="agent",
            content=content,
            quick_replies=tuple(quick_replies),
            sources=tuple(sources),
        )
        self._transcript.append(message)
        return message

    async def process_message(self, user_message: str) -> Message:
        """Answer one user turn; always returns an agent message."""
        self._transcript.append(Message(role="user", content=user_message))

        try:
            request = self.build_request(user_message)
            result = await self.client.send_message(request)

            if not result["success"]:
                error: Optional[str] = result.get("error")  # type: ignore[assignment]
                logger.warning("Reasoning backend reported a failure: %s", error)
                return self._append_agent_message(fallback_message(str(error or "")), FAILURE_QUICK_REPLIES)

            data = result["data"]
            reply = data["message"]
            if not isinstance(reply, str):
                raise TypeError(f"Reply message must be a string, got {type(reply).__name__}")
            suggestions = [s for s in (data.get("suggestions") or []) if isinstance(s, str)]
            sources = [
                {"title": s.get("title") or s.get("url", ""), "url": s["url"]}
                for s in (data.get("sources") or [])
                if isinstance(s, dict) and s.get("url")
            ]
        except Exception:
            logger.exception("Error processing chat message")
            return self._append_agent_message(CONNECTION_APOLOGY, CONNECTION_APOLOGY_QUICK_REPLIES)

        self._remember_exchange(user_message, reply)
        return self._append_agent_message(reply, suggestions, sources)
