"""
Flask extensions - created here, bound to the app in __init__.py.
"""

import logging
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# SQLAlchemy - ORM used by every model (User, Report, ReportLike, ...)
db = SQLAlchemy()

# Flask-Migrate - Alembic wrapper
# Commands: flask db migrate, flask db upgrade
migrate = Migrate()

# Flask-CORS - the frontend is served from another origin
cors = CORS()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FK constraints (and ON DELETE CASCADE) unless asked."""
    module = type(dbapi_connection).__module__
    if module.startswith('sqlite3') or module.startswith('pysqlite'):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


@contextmanager
def atomic():
    """
    Unit of work around the request-scoped session.

    Commits on success and rolls back on every failure path.
    IntegrityError is re-raised as is so callers can resolve
    uniqueness races; any other store failure becomes StorageError.

    Usage:
        with atomic():
            db.session.add(report)
    """
    from .services.errors import StorageError

    try:
        yield db.session
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Database write failed')
        raise StorageError()
    except Exception:
        db.session.rollback()
        raise
