import sqlite3
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from config.logging import get_logger
from utils.errors import DataAccessError, OperationCancelledError

log = get_logger()

db = SQLAlchemy()

# PostgreSQL SQLSTATE for "canceling statement due to statement timeout"
QUERY_CANCELED = "57014"


def initialize_db(app):
    """
    Initialize SQLAlchemy with the app config.

    Pool settings come from DB_POOL_SIZE / DB_MAX_OVERFLOW / DB_POOL_RECYCLE.
    SQLite (tests, local runs) keeps SQLAlchemy's default pool.
    """
    database_url = app.config.get('SQLALCHEMY_DATABASE_URI') or ''
    app.config.setdefault('SQLALCHEMY_TRACK_MODIFICATIONS', False)

    if not database_url.startswith('sqlite'):
        pool_config = {
            "pool_size": app.config.get('DB_POOL_SIZE', 10),
            "max_overflow": app.config.get('DB_MAX_OVERFLOW', 5),
            "pool_timeout": 30,
            "pool_recycle": app.config.get('DB_POOL_RECYCLE', 3600),
            "pool_pre_ping": True,
        }
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = pool_config
        log.info(f"Database pool configured: {pool_config['pool_size']} connections + {pool_config['max_overflow']} overflow")

    db.init_app(app)


def shutdown_db(app):
    """Release every pooled connection (graceful shutdown)"""
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    log.info("Database connections released")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@contextmanager
def transaction_scope(session):
    """
    One transaction per operation.

    The body must call session.commit() on its success path; every other
    exit (exception, early return, cancellation) rolls back.
    """
    try:
        yield session
    finally:
        # no-op after a successful commit
        session.rollback()


@contextmanager
def store_step(description, on_integrity_error=DataAccessError):
    """
    Wrap store errors raised inside the block with the failing step's context

    Args:
        description: What the step does, e.g. "add job to BOQ"
        on_integrity_error: Error kind raised for constraint violations
    """
    try:
        yield
    except IntegrityError as e:
        log.error(f"Constraint violation while trying to {description}: {e.orig}")
        raise on_integrity_error(f"failed to {description}: {e.orig}") from e
    except OperationalError as e:
        if getattr(e.orig, 'pgcode', None) == QUERY_CANCELED:
            raise OperationCancelledError(f"failed to {description}: statement timed out") from e
        log.error(f"Database error while trying to {description}: {str(e)}")
        raise DataAccessError(f"failed to {description}: {e}") from e
    except SQLAlchemyError as e:
        log.error(f"Database error while trying to {description}: {str(e)}")
        raise DataAccessError(f"failed to {description}: {e}") from e


def apply_statement_timeout(session, deadline):
    """Push the deadline's remaining budget down to PostgreSQL for this transaction"""
    if deadline is None:
        return
    remaining = deadline.remaining()
    if remaining is None:
        return
    if session.get_bind().dialect.name != 'postgresql':
        return
    timeout_ms = max(1, int(remaining * 1000))
    with store_step("set statement timeout"):
        session.execute(
            text("SELECT set_config('statement_timeout', :timeout, true)"),
            {"timeout": str(timeout_ms)},
        )
