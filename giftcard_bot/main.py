# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Dict

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config import CORS_ORIGINS, DATABASE_URL
from .db import create_session_factory
from .logging_config import setup_logging
from .middleware import RequestIDMiddleware
from .routes import chat_router, limiter
from .services.session import SessionStore
from .tasks.state_machine import DialogueEngine

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Gift Card Bot API",
    description="Conversational API for buying Amazon Pay gift cards",
    version="1.0.0",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Chat", "description": "Gift card purchase dialogue"},
    ],
)

# ---------- Session Store and Dialogue Engine ----------
# One store and one engine per process. Both are reached through app.state
# so tests can swap in fresh instances.
store = SessionStore(session_factory=create_session_factory(DATABASE_URL))
engine = DialogueEngine()

app.state.session_store = store
app.state.dialogue_engine = engine

if DATABASE_URL:
    logger.info("Session persistence enabled")

# ---------- Middleware ----------
# Adds a unique request ID to each request for debugging and log correlation
app.add_middleware(RequestIDMiddleware)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS configuration
# In production, set CORS_ORIGINS environment variable to restrict allowed origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
def health() -> Dict[str, str]:
    """Health check endpoint. Returns ok if the service is running."""
    return {"status": "ok"}


# ---------- Include Routers with API Version Prefix ----------
# All API endpoints are available under /api/v1/
api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(chat_router)

app.include_router(api_v1_router)

# Also mount at root so existing clients keep working
app.include_router(chat_router)
