"""Chat proxy feature."""

from .models import DEFAULT_PROMPT, ChatRequest, Message
from .provider import (
    CompletionProvider, PydanticAIProvider, ProviderError, get_completion_provider
)
from .routes import router

__all__ = [
    "DEFAULT_PROMPT", "ChatRequest", "Message",
    "CompletionProvider", "PydanticAIProvider", "ProviderError", "get_completion_provider",
    "router"
]
