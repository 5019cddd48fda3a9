"""Chat Proxy API - Main Application."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from config import get_settings
from chat import router as chat_router

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(
        "starting_chat_proxy_api",
        environment=settings.environment,
        model=settings.default_model
    )
    yield
    logger.info("shutting_down_chat_proxy_api")


app = FastAPI(
    title="Chat Proxy API",
    version="1.0.0",
    description="Forwards chat messages to a hosted completion provider",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(chat_router, prefix="/api/chat", tags=["Chat"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "service": "chat-proxy-backend"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Chat Proxy API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "chat": "/api/chat"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
