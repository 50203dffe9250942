"""FastAPI server for the Allora inference agent."""

import logging
from typing import List, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from .allora_app import AlloraAgentApp
from .errors import AlloraPluginError, ConfigurationError

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    """Chat request model."""
    prompt: str
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    """Chat response model."""
    session_id: str
    handled: bool
    replies: List[str]


def _to_http_error(error: Exception) -> HTTPException:
    """Map plugin and model errors to an HTTP error carrying their message."""
    if isinstance(error, ConfigurationError):
        logger.error(f"Configuration error: {error}")
        return HTTPException(status_code=500, detail=str(error))
    # Upstream API or model output failures
    logger.error(f"Upstream error: {error}")
    return HTTPException(status_code=502, detail=str(error))


def create_app(agent: Optional[AlloraAgentApp] = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        agent: Application facade; a default one is built from config when None.

    Returns:
        Configured FastAPI application
    """
    agent = agent or AlloraAgentApp()

    app = FastAPI(title="Allora Inference Agent API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(request: ChatRequest) -> ChatResponse:
        """Answer a prediction question."""
        session_id = request.session_id or str(uuid4())
        logger.info(f"Processing prompt for session {session_id}")

        try:
            outcome = await agent.handle_message(request.prompt, session_id=session_id)
        except (AlloraPluginError, ValueError) as e:
            raise _to_http_error(e) from e

        return ChatResponse(session_id=session_id, handled=outcome.handled, replies=outcome.replies)

    @app.get("/api/topics")
    async def topics():
        """List Allora Network topics as text."""
        try:
            return {"topics": await agent.describe_topics()}
        except (AlloraPluginError, ValueError) as e:
            raise _to_http_error(e) from e

    @app.post("/api/reset")
    async def reset_session(session_id: Optional[str] = None):
        """Reset a chat session and return a fresh session id."""
        if session_id:
            agent.reset_session(session_id)

        return {"session_id": str(uuid4()), "message": "Session reset successfully"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
