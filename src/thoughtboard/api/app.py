"""
Main FastAPI application for Thoughtboard backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.tokens import get_token_signer
from ..config import Settings, settings
from ..graphql.schema import create_graphql_router, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import DocumentStore, get_document_store

logger = get_logger(__name__)


def create_app(config: Settings | None = None, store: DocumentStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings to use instead of the environment-loaded ones
        store: Pre-built document store; when omitted one is created from settings
    """
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Thoughtboard API...", store_backend=config.store_backend)

        app.state.tokens = get_token_signer(config)
        app.state.store = store or get_document_store(config)

        create_tables = getattr(app.state.store, "create_tables", None)
        if create_tables is not None:
            await create_tables()
        logger.info("Document store initialized", store=type(app.state.store).__name__)

        yield

        logger.info("Shutting down Thoughtboard API...")
        await app.state.store.close()

    app = FastAPI(
        title="Thoughtboard API",
        description="Share short thoughts, react to them and add friends",
        version=__version__,
        lifespan=lifespan,
        debug=config.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Fail fast: the server should not start with a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()
    app.include_router(create_graphql_router(graphiql=config.graphiql), prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")

    return app


def build_app() -> FastAPI:
    """Application factory used by uvicorn (``--factory``)."""
    configure_logging(debug=settings.debug, level=settings.log_level)
    return create_app()
