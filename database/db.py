"""
Database Configuration Module

The engine is built from DATABASE_URL (see config.settings). Postgres is the
production target; any SQLAlchemy URL works, which is how the test suite runs
against an in-memory SQLite database.

Connection Pooling Strategy:
- Postgres: pool_size=30, max_overflow=20 (50 total)
- SQLite: a single shared connection (StaticPool)
"""

from datetime import datetime
import uuid as uuid
from pytz import timezone

from sqlalchemy import Column, TIMESTAMP, Boolean, Integer, Uuid, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from config import DATABASE_URL
from logger import logger


# ============================================
# CONNECTION POOL SETTINGS
# ============================================

# Pool configuration for the reference-data read path
POOL_CONFIG = {
    # Base pool size - always maintain this many connections
    "pool_size": 30,
    # Additional connections allowed during peak load
    "max_overflow": 20,
    # Timeout waiting for a connection from pool (seconds)
    "pool_timeout": 30,
    # Test connection health before using (handles stale connections)
    "pool_pre_ping": True,
    # Recycle connections after 30 minutes
    "pool_recycle": 1800,
    "echo": False,
    "poolclass": QueuePool,
}

SQLITE_CONFIG = {
    "connect_args": {"check_same_thread": False},
    "poolclass": StaticPool,
    "echo": False,
}


def build_engine(database_url: str = DATABASE_URL):
    if database_url.startswith("sqlite"):
        return create_engine(database_url, **SQLITE_CONFIG)
    return create_engine(database_url, **POOL_CONFIG)


db_engine = build_engine()

# ============================================
# SESSION CONFIGURATION
# ============================================

SessionLocal = sessionmaker(
    autoflush=False,  # Manual flush for better control
    bind=db_engine,
    expire_on_commit=False,  # Prevent attribute expiration on commit
)

UTC = timezone("UTC")


def time_now():
    """Get current UTC time"""
    return datetime.now(UTC)


# ============================================
# CONNECTION POOL MONITORING
# ============================================


@event.listens_for(db_engine, "checkout")
def receive_checkout(dbapi_connection, connection_record, connection_proxy):
    logger.debug("Connection checked out from pool")


@event.listens_for(db_engine, "checkin")
def receive_checkin(dbapi_connection, connection_record):
    logger.debug("Connection returned to pool")


def get_pool_status():
    """
    Get current connection pool status.

    Returns:
        dict: Pool status including size, checked out, overflow
    """
    pool = db_engine.pool
    if not isinstance(pool, QueuePool):
        return {"pool": pool.status()}
    return {
        "pool_size": pool.size(),
        "checked_out": pool.checkedout(),
        "overflow": pool.overflow(),
        "checked_in": pool.checkedin(),
    }


# ============================================
# DECLARATIVE BASE
# ============================================

DBBase = declarative_base()


def init_models():
    """
    Create any missing tables and the counters the service hands out.
    Existing tables and counters are left untouched.
    """
    # registers every table on DBBase.metadata
    from models.sequence import seed_sequences

    DBBase.metadata.create_all(bind=db_engine)

    db: Session = SessionLocal()
    try:
        seed_sequences(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info("Database tables initialised")


# ============================================
# SESSION MANAGEMENT
# ============================================


def get_db():
    """
    Generator function for database session dependency injection.

    Usage in FastAPI:
        @router.get("/")
        def endpoint(db: Session = Depends(get_db)):
            ...

    The engine core only reads, so the session is rolled back when the
    request asks for it and committed otherwise.
    """
    from context_manager.context import context_set_db_session_rollback

    db: Session = SessionLocal()
    try:
        logger.debug("DB session created")
        yield db

        if context_set_db_session_rollback.get():
            logger.debug("Rolling back DB session")
            db.rollback()
        else:
            logger.debug("Committing DB session")
            db.commit()

    except Exception as e:
        logger.error(f"DB session error: {e}")
        db.rollback()
        raise
    finally:
        logger.debug("Closing DB session")
        db.close()


# ============================================
# BASE MODEL CLASS
# ============================================


class DBBaseClass:
    """
    Base class for all database models.

    Provides:
    - Auto-incrementing primary key (id)
    - UUID for external references
    - Created/updated timestamps
    - Soft delete flag
    """

    id = Column(Integer, primary_key=True, unique=True, autoincrement=True)

    # UUID for external API references (don't expose internal IDs)
    uuid = Column(Uuid(as_uuid=True), default=uuid.uuid4, unique=True, nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), default=time_now, nullable=False)
    updated_at = Column(
        TIMESTAMP(timezone=True),
        default=time_now,
        onupdate=time_now,
        nullable=False,
    )

    is_deleted = Column(Boolean, default=False, index=True)

    @classmethod
    def get_by_id(cls, id):
        """Get record by ID"""
        from context_manager.context import get_db_session

        db: Session = get_db_session()
        return db.query(cls).filter(cls.id == id, cls.is_deleted.is_(False)).first()

    def soft_delete(self):
        """Mark record as deleted (soft delete)"""
        self.is_deleted = True
        self.updated_at = time_now()
