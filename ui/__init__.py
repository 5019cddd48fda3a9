"""Chat UI feature."""

from .client import ChatApiClient
from .session import ChatBackend, ChatSession, SubmitState

__all__ = ["ChatApiClient", "ChatBackend", "ChatSession", "SubmitState"]
