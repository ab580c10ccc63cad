"""
Database session management
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

# Connection execution option asking SQLite for a write-locked transaction
IMMEDIATE_TRANSACTION = "sqlite_begin_immediate"


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine with the transaction behaviour the services rely on

    For SQLite, pysqlite's implicit transaction handling is switched off and
    the engine emits BEGIN itself. Reads get a deferred BEGIN. A connection
    carrying the IMMEDIATE_TRANSACTION execution option (see begin_write)
    opens with BEGIN IMMEDIATE, so a read-modify-write sequence holds the
    write lock from its first read. Foreign keys are enforced and lock
    waits are bounded by LOCK_TIMEOUT_SECONDS.

    Args:
        url: SQLAlchemy database URL
        **kwargs: Extra create_engine arguments (e.g. poolclass for tests)

    Returns:
        Configured Engine
    """
    if not _is_sqlite(url):
        return create_engine(url, pool_pre_ping=True, echo=False, **kwargs)

    connect_args = kwargs.pop("connect_args", {})
    connect_args.setdefault("check_same_thread", False)
    connect_args.setdefault("timeout", settings.LOCK_TIMEOUT_SECONDS)
    engine = create_engine(url, connect_args=connect_args, echo=False, **kwargs)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get(IMMEDIATE_TRANSACTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def begin_write(db: Session) -> None:
    """
    Start the session's transaction as a write transaction

    On SQLite this takes the database write lock up front, so concurrent
    writers queue on BEGIN instead of failing when a read lock is upgraded.
    A session that is already inside a transaction keeps it. Other backends
    ignore the option and rely on row locks.
    """
    if db.in_transaction():
        return
    db.connection(execution_options={IMMEDIATE_TRANSACTION: True})


def create_tables(bind: Engine) -> None:
    """Create all tables registered on Base.metadata"""
    import app.models  # noqa: F401
    from app.db.base import Base

    Base.metadata.create_all(bind=bind)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
