"""Gemini-backed reasoning client for chat turns."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import errors
from google.genai import types as genai_types

from .prompts import build_system_prompt, generate_suggestions
from .types import ChatRequest, ChatResult, SourceCitation

logger = logging.getLogger(__name__)

RATE_LIMIT_EXHAUSTED_ERROR = "Rate limit reached: Gemini quota exhausted, too many requests."
HIGH_DEMAND_ERROR = "Service temporarily unavailable due to high demand. Please try again in a moment."


class GeminiChatClient:
    """Answers chat turns directly with Gemini instead of the HTTP backend."""

    def __init__(
        self,
        api_key: str,
        model_name: str,
        max_retries: int = 3,
        retry_wait_seconds: float = 60,
        temperature: float = 0.7,
        max_output_tokens: int = 500,
        client: Optional[Any] = None,
    ) -> None:
        if client is None and not api_key:
            raise ValueError("Gemini API key is required")
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.client = client or genai.Client(api_key=api_key)
        self.model_name = model_name
        self.max_retries = max_retries
        self.retry_wait_seconds = retry_wait_seconds
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens

    def _generation_config(self, system_prompt: str, enable_web_search: bool) -> genai_types.GenerateContentConfig:
        tools = [genai_types.Tool(google_search=genai_types.GoogleSearch())] if enable_web_search else None
        return genai_types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=self.temperature,
            top_p=0.8,
            top_k=40,
            max_output_tokens=self.max_output_tokens,
            tools=tools,
        )

    @staticmethod
    def _build_contents(request: ChatRequest) -> List[genai_types.Content]:
        contents = [
            genai_types.Content(
                role="user" if entry["role"] == "user" else "model",
                parts=[genai_types.Part(text=entry["content"])],
            )
            for entry in request["history"]
        ]
        contents.append(genai_types.Content(role="user", parts=[genai_types.Part(text=request["message"])]))
        return contents

    @staticmethod
    def _status_code(error: Exception) -> Optional[int]:
        """Extract HTTP-like status code from Gemini SDK errors."""
        status_code = getattr(error, "status_code", None)
        if isinstance(status_code, int):
            return status_code
        code = getattr(error, "code", None)
        if isinstance(code, int):
            return code
        return None

    @staticmethod
    def _extract_sources(response: Any) -> List[SourceCitation]:
        """Collect web citations from grounding metadata, if any."""
        sources: List[SourceCitation] = []
        seen: set[str] = set()
        for candidate in getattr(response, "candidates", None) or []:
            metadata = getattr(candidate, "grounding_metadata", None)
            for chunk in getattr(metadata, "grounding_chunks", None) or []:
                web = getattr(chunk, "web", None)
                url = getattr(web, "uri", None)
                if not url or url in seen:
                    continue
                seen.add(url)
                sources.append({"title": getattr(web, "title", None) or url, "url": url})
        return sources

    async def send_message(self, request: ChatRequest) -> ChatResult:
        """Generate a reply; retries only on HTTP 429."""
        config = self._generation_config(
            build_system_prompt(request["context"]),
            request.get("enableWebSearch", False),
        )
        contents = self._build_contents(request)

        for attempt in range(self.max_retries):
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model_name,
                    contents=contents,
                    config=config,
                )
            except Exception as exc:
                status_code = self._status_code(exc)
                if status_code == 429:
                    logger.warning("Gemini rate limit hit (attempt %d of %d)", attempt + 1, self.max_retries)
                    if attempt == self.max_retries - 1:
                        return {"success": False, "error": RATE_LIMIT_EXHAUSTED_ERROR}
                    await asyncio.sleep(self.retry_wait_seconds)
                    continue

                logger.error("Gemini request failed (%s): %s", status_code or "unknown", exc)
                message = str(exc).lower()
                if isinstance(exc, errors.APIError) and ("quota" in message or "rate limit" in message):
                    return {"success": False, "error": HIGH_DEMAND_ERROR}
                return {"success": False, "error": f"Unable to connect to the reasoning service: {exc}"}

            text = getattr(response, "text", None)
            if not text or not text.strip():
                return {"success": False, "error": "Empty response from Gemini API"}

            return {
                "success": True,
                "data": {
                    "message": text.strip(),
                    "suggestions": generate_suggestions(request["context"]),
                    "sources": self._extract_sources(response),
                },
            }

        return {"success": False, "error": "Gemini request failed after retries."}
