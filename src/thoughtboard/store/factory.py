"""Factory for creating the document store based on configuration."""

from ..config import Settings, settings
from ..logging import get_logger
from .base import DocumentStore
from .memory import InMemoryDocumentStore

logger = get_logger(__name__)


def get_document_store(config: Settings | None = None) -> DocumentStore:
    """Create and return the configured document store."""
    config = config or settings
    backend = config.store_backend.lower()

    if backend == "memory":
        if config.is_production:
            logger.warning(
                "In-memory store is active in production - all data is lost on restart"
            )
        return InMemoryDocumentStore()

    elif backend == "sql":
        from ..database import init_database
        from .sql import SQLDocumentStore

        return SQLDocumentStore(init_database(config.database_url, force_reinit=True))

    else:
        raise ValueError(f"Unsupported store backend: {config.store_backend}")
