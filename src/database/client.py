import logging
from .mongo_adapter import MongoAdapter

logger = logging.getLogger(__name__)


def init_db(connection_string: str, timeout_ms: int = 5000) -> MongoAdapter:
    """Connect to MongoDB once and make sure the collection indexes exist."""
    adapter = MongoAdapter(connection_string, timeout_ms=timeout_ms)
    if adapter.connected:
        try:
            adapter.init_collections()
        except Exception as e:
            # Index creation is an optimisation; the app still serves without it
            logger.warning(f"Skipping index creation: {e}")
    return adapter
