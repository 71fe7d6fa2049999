"""HTTP client for the chat (RAG) backend with retry on transient failures."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from .types import ChatFailure, ChatRequest, ChatResult

logger = logging.getLogger(__name__)

RATE_LIMITED_ERROR = "Too many requests. Please wait a moment and try again."
UNAVAILABLE_ERROR = "The chat service is temporarily unavailable. Please try again in a moment."
CONNECTION_ERROR = "Unable to connect to the chat service. Please check your internet connection."

# Failures that will not improve by retrying immediately.
_NON_RETRYABLE_MARKERS = ("Too many requests", "validation")


class RagApiClient:
    """Sends chat turns to ``{base_url}/chat/message``."""

    def __init__(
        self,
        base_url: str,
        max_retries: int = 2,
        backoff_seconds: float = 1.0,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def send_chat_message(self, request: ChatRequest) -> ChatResult:
        """Single attempt; every failure comes back as a result value."""
        url = f"{self.base_url}/chat/message"
        try:
            response = await self._client.post(url, json=request)
        except httpx.TransportError as exc:
            logger.warning("Chat request to %s failed: %s", url, exc)
            return {"success": False, "error": CONNECTION_ERROR}

        if response.status_code == 429:
            return {"success": False, "error": RATE_LIMITED_ERROR}
        if response.status_code == 503:
            return {"success": False, "error": UNAVAILABLE_ERROR}

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Chat backend returned a non-JSON body (status %s)", response.status_code)
            return {"success": False, "error": f"Invalid response from chat service: {exc}"}

        if not response.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            return {"success": False, "error": error or f"Request failed with status {response.status_code}"}

        return {"success": True, "data": data}

    async def send_message(self, request: ChatRequest) -> ChatResult:
        """Send a chat turn, retrying transient failures with exponential backoff."""
        last_error: ChatFailure = {
            "success": False,
            "error": "Failed to send message after multiple attempts",
        }

        for attempt in range(self.max_retries + 1):
            result = await self.send_chat_message(request)
            if result["success"]:
                return result

            last_error = result
            if any(marker in result["error"] for marker in _NON_RETRYABLE_MARKERS):
                break

            if attempt < self.max_retries:
                wait = self.backoff_seconds * (2 ** attempt)
                logger.info(
                    "Chat attempt %d of %d failed (%s); retrying in %.1fs",
                    attempt + 1,
                    self.max_retries + 1,
                    result["error"],
                    wait,
                )
                await asyncio.sleep(wait)

        return last_error

    async def check_health(self) -> bool:
        try:
            response = await self._client.get(f"{self.base_url}/chat/health")
        except httpx.HTTPError:
            return False
        return response.is_success
