import logging
import os
import time

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

# Pool tuning for server databases
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))
ENABLE_QUERY_LOGGING = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"
SLOW_QUERY_THRESHOLD = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0"))


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str):
    """Create an engine; SQLite gets a thread-shareable connection, servers get a tuned pool"""
    if is_sqlite(url):
        from sqlalchemy.pool import StaticPool

        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=POOL_RECYCLE,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_timeout=POOL_TIMEOUT,
        echo=False,
    )


try:
    engine = build_engine(DATABASE_URL)
    logger.info(f"✅ Database engine ready ({engine.dialect.name})")
    if not is_sqlite(DATABASE_URL):
        logger.info(
            f"📊 Pool size={POOL_SIZE} overflow={MAX_OVERFLOW} timeout={POOL_TIMEOUT}s recycle={POOL_RECYCLE}s"
        )
except Exception as e:
    logger.error(f"❌ Could not build the database engine: {e}")
    raise

# Queries slower than DB_SLOW_QUERY_THRESHOLD seconds are logged as warnings
if ENABLE_QUERY_LOGGING:

    @event.listens_for(engine, "before_cursor_execute")
    def _start_timer(conn, _cursor, statement, _parameters, context, _executemany):
        conn.info.setdefault("started_at", []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def _log_if_slow(conn, _cursor, statement, _parameters, context, _executemany):
        total = time.time() - conn.info["started_at"].pop()
        if total > SLOW_QUERY_THRESHOLD:
            logger.warning(f"🐌 {total:.2f}s: {statement[:200]}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
