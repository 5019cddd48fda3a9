"""Completion provider backed by Pydantic AI."""

from functools import lru_cache
from typing import AsyncIterator, Optional, Protocol
from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openrouter import OpenRouterProvider
from pydantic_ai.settings import ModelSettings
import structlog

from config import get_settings

logger = structlog.get_logger()


class ProviderError(Exception):
    """Raised when the hosted completion provider fails."""


class CompletionProvider(Protocol):
    """Prompt text in, response text or fragment sequence out."""

    def prepare(self) -> None:
        ...

    async def complete(self, prompt: str) -> str:
        ...

    def stream(self, prompt: str) -> AsyncIterator[str]:
        ...


class PydanticAIProvider:
    """Forwards prompts to an OpenRouter model through a Pydantic AI agent."""

    def __init__(self, agent: Optional[Agent] = None):
        settings = get_settings()
        self.model_name = settings.default_model
        self.model_settings = ModelSettings(temperature=settings.temperature)
        self._agent = agent

    def _get_agent(self) -> Agent:
        """Create the agent on first use."""
        if self._agent is None:
            settings = get_settings()
            if settings.openrouter_api_key is None:
                raise ProviderError("OPENROUTER_API_KEY is not configured")
            model = OpenAIChatModel(
                self.model_name,
                provider=OpenRouterProvider(
                    api_key=settings.openrouter_api_key.get_secret_value()
                ),
            )
            self._agent = Agent(model)
            logger.info("provider_initialized", model=self.model_name)
        return self._agent

    def prepare(self) -> None:
        """Build the agent up front so configuration errors surface before streaming starts.

        Raises:
            ProviderError: If the agent cannot be created
        """
        try:
            self._get_agent()
        except ProviderError:
            raise
        except Exception as e:
            logger.error("provider_prepare_failed", error=str(e))
            raise ProviderError(str(e)) from e

    async def complete(self, prompt: str) -> str:
        """Run the agent and return the full response text.

        Args:
            prompt: User's message, forwarded unmodified

        Returns:
            Generated text

        Raises:
            ProviderError: If the provider call fails for any reason
        """
        try:
            agent = self._get_agent()
            result = await agent.run(prompt, model_settings=self.model_settings)
        except ProviderError:
            raise
        except Exception as e:
            logger.error("provider_run_failed", error=str(e))
            raise ProviderError(str(e)) from e
        return result.output

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """Yield response text fragments as the provider produces them.

        Args:
            prompt: User's message, forwarded unmodified

        Yields:
            Text deltas in provider order

        Raises:
            ProviderError: If the provider call fails before or during streaming
        """
        try:
            agent = self._get_agent()
            async with agent.run_stream(prompt, model_settings=self.model_settings) as result:
                async for fragment in result.stream_text(delta=True):
                    yield fragment
        except ProviderError:
            raise
        except Exception as e:
            logger.error("provider_stream_failed", error=str(e))
            raise ProviderError(str(e)) from e


@lru_cache
def get_completion_provider() -> CompletionProvider:
    """FastAPI dependency for the shared CompletionProvider."""
    return PydanticAIProvider()
