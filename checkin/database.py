# =======================================================================================
# checkin/database.py - Database Management
# =======================================================================================
import logging
from contextlib import contextmanager
from typing import Any, Dict

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from .config import config
from .models.tables import metadata

logger = logging.getLogger(__name__)


def _engine_kwargs(db_url: str) -> Dict[str, Any]:
    """SQLite does not take the server pool/isolation settings."""
    if db_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "future": True}
    return {
        "poolclass": QueuePool,
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": config.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "isolation_level": "READ COMMITTED",
        "future": True,
    }


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, db_url: str = None):
        self.db_url = db_url or config.DB_URL
        self.engine: Engine = create_engine(self.db_url, **_engine_kwargs(self.db_url))

    def create_schema(self) -> None:
        """Create missing tables."""
        metadata.create_all(self.engine)
        logger.info("Database schema ready (%s)", self.engine.url.get_backend_name())

    @contextmanager
    def get_connection(self):
        """Get a database connection with automatic commit/rollback."""
        with self.engine.begin() as conn:
            yield conn

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()


# Global database instance
db_manager = DatabaseManager()
