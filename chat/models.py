"""Chat data models."""

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROMPT = "Tell me a joke"

Sender = Literal["user", "ai"]


class ChatRequest(BaseModel):
    """Chat request from user, read from the query string."""
    message: str = Field(DEFAULT_PROMPT, description="Prompt forwarded to the provider")


class Message(BaseModel):
    """A single entry in the conversation."""
    model_config = ConfigDict(frozen=True)

    text: str
    sender: Sender
