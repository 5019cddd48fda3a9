"""Conversation state for the chat UI.

A session owns the ordered message list shown on the page, the pending
input text and a loading flag. Every submission walks the same small state
machine::

    IDLE -> SENDING -> APPENDED | FAILED -> IDLE

The list is append-only and lives only as long as the session.
"""

from enum import Enum
from typing import Callable, Iterator, Optional, Protocol
import httpx
import structlog

from chat.models import Message

logger = structlog.get_logger()


class SubmitState(str, Enum):
    """Lifecycle of a single submission."""
    IDLE = "idle"
    SENDING = "sending"
    APPENDED = "appended"
    FAILED = "failed"


class ChatBackend(Protocol):
    """What the session needs from the proxy endpoint."""

    def send(self, message: str) -> str:
        ...

    def stream(self, message: str) -> Iterator[str]:
        ...

    def close(self) -> None:
        ...


class ChatSession:
    """In-memory conversation driven by user submissions."""

    def __init__(self, backend: ChatBackend):
        self.backend = backend
        self.messages: list[Message] = []
        self.input_text: str = ""
        self.loading: bool = False
        self.state: SubmitState = SubmitState.IDLE

    def _begin(self, text: Optional[str]) -> Optional[str]:
        prompt = (self.input_text if text is None else text).strip()
        if not prompt:
            return None
        self.messages.append(Message(text=prompt, sender="user"))
        self.input_text = ""
        self.loading = True
        self.state = SubmitState.SENDING
        return prompt

    def _finish(self, reply: Optional[str]) -> SubmitState:
        if reply is None:
            result = SubmitState.FAILED
        else:
            self.messages.append(Message(text=reply, sender="ai"))
            result = SubmitState.APPENDED
        self.loading = False
        self.state = SubmitState.IDLE
        return result

    def submit(self, text: Optional[str] = None) -> SubmitState:
        """Send the input and append the reply.

        Args:
            text: Text to submit; defaults to the pending ``input_text``

        Returns:
            IDLE when there was nothing to send, otherwise APPENDED or FAILED
        """
        prompt = self._begin(text)
        if prompt is None:
            return SubmitState.IDLE

        reply = None
        try:
            reply = self.backend.send(prompt)
        except httpx.HTTPError as e:
            logger.error("chat_submit_failed", error=str(e))
        finally:
            result = self._finish(reply)
        return result

    def submit_streaming(
        self,
        text: Optional[str] = None,
        on_fragment: Optional[Callable[[str], None]] = None
    ) -> SubmitState:
        """Like ``submit`` but consumes the streaming endpoint.

        Fragments are passed to ``on_fragment`` as they arrive. The AI message
        is appended once, after the stream completes.
        """
        prompt = self._begin(text)
        if prompt is None:
            return SubmitState.IDLE

        reply = None
        try:
            fragments = []
            for fragment in self.backend.stream(prompt):
                fragments.append(fragment)
                if on_fragment:
                    on_fragment(fragment)
            reply = "".join(fragments)
        except httpx.HTTPError as e:
            logger.error("chat_stream_submit_failed", error=str(e))
        finally:
            result = self._finish(reply)
        return result
