from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from ivrit.core.config import settings
import logging

logger = logging.getLogger(__name__)

# Ensure the URL uses postgresql:// (not postgres://) for SQLAlchemy
db_url = settings.database_url
if db_url.startswith("postgres://"):
    db_url = db_url.replace("postgres://", "postgresql://", 1)

logger.info(f"Connecting to database: {db_url[:20]}...")  # Log partial URL for debugging


def build_engine(url: str):
    """Create an engine with pool options suited to the backend."""
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(db_url)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)
