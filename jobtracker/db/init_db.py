import logging

from jobtracker.db.session import engine
from jobtracker.db.base import Base

logger = logging.getLogger(__name__)


def init_db(bind=engine):
    """Create all tables that do not exist yet."""
    # Registers every model on Base.metadata
    import jobtracker.db.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")
