"""Adapter for the OpenAI Responses API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from chatty.config import SYSTEM_INSTRUCTION, Settings
from chatty.exceptions import ChatError
from chatty.services.extraction import extract_text

logger = logging.getLogger(__name__)


class ChatService:
    """Send one prompt to the completion service and return its text."""

    _path = "/responses"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    @property
    def endpoint(self) -> str:
        return self._settings.openai_base_url.rstrip("/") + self._path

    async def complete(self, prompt: str) -> str:
        """Return the reply text for ``prompt``, or ``""`` if none was found."""

        payload = {
            "model": self._settings.model,
            "instructions": SYSTEM_INSTRUCTION,
            "input": prompt,
        }

        headers = {
            "Authorization": f"Bearer {self._settings.openai_api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.chat_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if not exc.response.is_error:
                logger.error(
                    "Completion request was redirected",
                    extra={
                        "status_code": status_code,
                        "location": exc.response.headers.get("location"),
                    },
                )
                raise ChatError.unexpected(f"Unexpected upstream status: {status_code}") from exc
            logger.error(
                "Completion request failed",
                extra={"status_code": status_code, "response_text": exc.response.text},
            )
            raise ChatError.upstream(status_code, _upstream_message(exc.response)) from exc
        except httpx.TimeoutException as exc:
            logger.warning("Completion request timed out", exc_info=exc)
            raise ChatError.unexpected(str(exc) or "Completion service timed out") from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected completion HTTP error")
            raise ChatError.unexpected(str(exc) or "Completion request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Completion response is not JSON", extra={"raw_response": response.text})
            raise ChatError.unexpected(f"Invalid completion response payload: {exc}") from exc

        text = extract_text(data)
        if not text:
            logger.warning("No text found in completion response", extra={"raw_response": data})
        return text


def _upstream_message(response: httpx.Response) -> str:
    """Best available human-readable message from an upstream error response."""

    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error

    return response.text or response.reason_phrase
