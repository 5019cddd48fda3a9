"""Chat API routes."""

from typing import Annotated, AsyncIterator
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, StreamingResponse
import structlog

from chat.models import ChatRequest
from chat.provider import CompletionProvider, ProviderError, get_completion_provider

logger = structlog.get_logger()

router = APIRouter()


@router.get("", response_class=PlainTextResponse)
async def chat(
    request: Annotated[ChatRequest, Query()],
    provider: CompletionProvider = Depends(get_completion_provider)
):
    """Forward a message to the completion provider and return the reply as plain text."""
    try:
        response = await provider.complete(request.message)
        logger.info("chat_completed", message_length=len(request.message))
        return PlainTextResponse(response)
    except ProviderError as e:
        logger.error("chat_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("chat_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stream")
async def chat_stream(
    request: Annotated[ChatRequest, Query()],
    provider: CompletionProvider = Depends(get_completion_provider)
):
    """Forward a message and stream the reply back as plain text fragments.

    The provider is prepared before the response starts so that configuration
    failures are still reported with an HTTP error status. The provider stream
    itself is opened and consumed entirely inside the response body.
    """
    try:
        provider.prepare()
    except ProviderError as e:
        logger.error("chat_stream_failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error("chat_stream_failed", error=str(e))
        raise HTTPException(status_code=500, detail=str(e))

    async def relay() -> AsyncIterator[str]:
        count = 0
        try:
            async for fragment in provider.stream(request.message):
                count += 1
                yield fragment
        except Exception as e:
            logger.error("chat_stream_aborted", fragments=count, error=str(e))
            raise
        logger.info("chat_stream_completed", message_length=len(request.message), fragments=count)

    return StreamingResponse(
        relay(),
        media_type="text/plain",
        headers={"Cache-Control": "no-cache"}
    )
