"""Client-side chat surface: input, loading flag, error and session history."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

import httpx

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"
TITLE = "Chatty AI"
SERVER_HINT = "Make sure your .env file contains OPENAI_API_KEY with your API key."


@dataclass(frozen=True)
class ChatEntry:
    """One prompt/response pair. Never changes once created."""

    id: int
    prompt: str
    response: str
    timestamp: str


def _local_timestamp(moment: datetime) -> str:
    return moment.strftime("%m/%d/%Y, %I:%M:%S %p")


class ChatSurface:
    """State and behaviour of the chat view.

    Only one submission may be in flight; ``loading`` is cleared whenever a
    submission ends, however it ends. History lives only as long as the
    instance, newest entry first.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        chat_path: str = CHAT_PATH,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._client = client
        self._chat_path = chat_path
        self._clock = clock
        self._history: list[ChatEntry] = []
        self._last_id = 0
        self.prompt = ""
        self.loading = False
        self.error = ""

    @property
    def history(self) -> tuple[ChatEntry, ...]:
        return tuple(self._history)

    async def submit(self, prompt_text: str | None = None) -> None:
        """Send the prompt (or the current input) and record the reply."""

        text = self.prompt if prompt_text is None else prompt_text
        if not text.strip() or self.loading:
            return

        self.loading = True
        self.error = ""

        try:
            response = await self._client.post(self._chat_path, json={"prompt": text})
            data = response.json()

            if not response.is_success:
                message = data.get("error") if isinstance(data, dict) else None
                raise RuntimeError(message or f"API Error: {response.status_code}")

            reply = data.get("response") if isinstance(data, dict) else None
            if not isinstance(reply, str) or not reply:
                raise RuntimeError("No response received from AI")

            self._history.insert(0, self._new_entry(text, reply))
            self.prompt = ""
        except Exception as exc:
            self.error = str(exc) or "Failed to get response from AI"
            logger.error("Chat submission failed: %s", self.error, exc_info=exc)
        finally:
            self.loading = False

    def clear(self) -> None:
        self._history.clear()
        self.error = ""

    async def handle_key(self, key: str, shift: bool = False) -> bool:
        """Apply a key press from the input; return True if it submitted.

        Enter submits, Shift+Enter inserts a newline, everything else is left
        to the input widget.
        """

        if key != "Enter":
            return False
        if shift:
            self.prompt += "\n"
            return False
        await self.submit()
        return True

    def render(self) -> str:
        lines = [TITLE, "Enter your prompt and get an AI-generated sassy response from Chatty", ""]
        lines.append(f"> {self.prompt}" if not self.loading else f"> {self.prompt} [disabled]")

        if self.error:
            lines += ["", "Error:", self.error, SERVER_HINT]

        if self.loading:
            lines += ["", "... Generating response..."]

        if self._history:
            count = len(self._history)
            noun = "conversation" if count == 1 else "conversations"
            lines += ["", f"Conversation History ({count} {noun})"]
            for entry in self._history:
                lines += [
                    "",
                    entry.timestamp,
                    "YOU",
                    _indent(entry.prompt),
                    TITLE,
                    _indent(entry.response),
                ]

        return "\n".join(lines)

    def _new_entry(self, prompt: str, response: str) -> ChatEntry:
        entry_id = max(int(time.time() * 1000), self._last_id + 1)
        self._last_id = entry_id
        return ChatEntry(
            id=entry_id,
            prompt=prompt,
            response=response,
            timestamp=_local_timestamp(self._clock()),
        )


def _indent(text: str) -> str:
    return "\n".join(f"  | {line}" for line in text.splitlines() or [""])
