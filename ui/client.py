"""HTTP client for the chat proxy endpoint."""

from typing import Iterator, Optional
import httpx
import structlog

from config import get_settings

logger = structlog.get_logger()


class ChatApiClient:
    """Sync client used by the chat UI to reach the proxy endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        settings = get_settings()
        self.base_url = base_url or settings.chat_api_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={"Accept": "text/plain"},
                timeout=self.timeout,
                transport=self._transport
            )
        return self._client

    def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()

    def send(self, message: str) -> str:
        """Send a message and return the full reply."""
        client = self._get_client()
        response = client.get("/api/chat", params={"message": message})
        response.raise_for_status()
        return response.text

    def stream(self, message: str) -> Iterator[str]:
        """Send a message and yield reply fragments as they arrive."""
        client = self._get_client()
        with client.stream("GET", "/api/chat/stream", params={"message": message}) as response:
            response.raise_for_status()
            for fragment in response.iter_text():
                if fragment:
                    yield fragment
