"""
HTTP Workbench - FastAPI Application Entry Point

Core of an ad-hoc HTTP request tool: dispatches requests, keeps a history
of completed exchanges and highlights response bodies for display.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from . import config
from .exceptions import register_exception_handlers
from .log import setup_logging
from .routers import commands, dispatch, highlight, history
from .services.dispatcher import RequestDispatcher
from .services.highlighter import SyntaxHighlighter
from .services.history_store import HistoryStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup: build the services once, before any request is served
    setup_logging(config.LOG_LEVEL)
    app.state.dispatcher = RequestDispatcher(timeout=config.DEFAULT_TIMEOUT)
    app.state.history_store = HistoryStore(config.DATABASE_URL)
    app.state.highlighter = SyntaxHighlighter()
    logger.info("HTTP Workbench started, history at {}", config.DATABASE_URL)
    yield
    # Shutdown: release database connections
    app.state.history_store.close()


app = FastAPI(
    title="HTTP Workbench",
    description="Send ad-hoc HTTP requests, keep their history and highlight responses",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Configure CORS middleware
# The front end runs as a separate process on its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers
register_exception_handlers(app)


@app.get("/")
async def root():
    """Root endpoint returning API information."""
    return {
        "name": "HTTP Workbench",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Register routers
app.include_router(dispatch.router)
app.include_router(history.router)
app.include_router(highlight.router)
app.include_router(commands.router)
