import logging
import time
import uuid
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from metrics import track_db_query
from utils import now_utc, format_query_log

# Retrieve main logger
logger = logging.getLogger("main")
query_logger = logging.getLogger("query")

# One client for the whole process, bound to each app by init_db
db = SQLAlchemy()


def to_dict(db_results):
    """Serialize a model row to JSON-safe primitives"""
    result = {}
    for c in db_results.__table__.columns:
        value = getattr(db_results, c.name)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, uuid.UUID):
            value = str(value)
        result[c.name] = value
    return result


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault("query_start_time", []).append(time.perf_counter())


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    start = conn.info["query_start_time"].pop(-1)
    duration_ms = (time.perf_counter() - start) * 1000
    query_logger.info(format_query_log(statement, parameters, duration_ms))


def _handle_query_error(exception_context):
    # after_cursor_execute never fires for a failed statement
    conn = exception_context.connection
    if conn is not None and conn.info.get("query_start_time"):
        conn.info["query_start_time"].pop(-1)


def init_db(app):
    with app.app_context():
        # Ensure foreign keys are enforced when an SQLite connection is opened
        @event.listens_for(db.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            import sqlite3
            if not isinstance(dbapi_connection, sqlite3.Connection):
                return

            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()

        already_logging = event.contains(db.engine, "after_cursor_execute", _after_cursor_execute)
        if app.config.get("LOG_QUERY") and not already_logging:
            event.listen(db.engine, "before_cursor_execute", _before_cursor_execute)
            event.listen(db.engine, "after_cursor_execute", _after_cursor_execute)
            event.listen(db.engine, "handle_error", _handle_query_error)
            logger.info("Query logging enabled")

        import models  # noqa: F401 - register tables on db.metadata
        db.create_all()
        logger.info(f"Database ready ({db.engine.dialect.name})")


def run_query(query, *args, **kwargs):
    """Run one database call, logging and re-raising any failure."""
    try:
        return query(*args, **kwargs)
    except SQLAlchemyError as e:
        logger.error(f"Query {getattr(query, '__name__', query)} failed: {e}", exc_info=True)
        db.session.rollback()
        raise


@track_db_query("get_website")
def get_website(website_uuid):
    from repositories.website_repository import WebsiteRepository
    return run_query(WebsiteRepository.get_by_uuid, website_uuid)


@track_db_query("get_websites")
def get_websites(user_id):
    from repositories.website_repository import WebsiteRepository
    return run_query(WebsiteRepository.get_all_by_user, user_id)


@track_db_query("create_session")
def create_session(website_id, **data):
    """Insert a session under a website and return the new session_id"""
    from repositories.session_repository import SessionRepository
    return run_query(SessionRepository.create, website_id, **data)


@track_db_query("get_session")
def get_session(session_uuid):
    from repositories.session_repository import SessionRepository
    return run_query(SessionRepository.get_by_uuid, session_uuid)


@track_db_query("save_pageview")
def save_pageview(website_id, session_id, url, referrer):
    from repositories.pageview_repository import PageviewRepository
    return run_query(PageviewRepository.create, website_id, session_id, url, referrer)


@track_db_query("save_event")
def save_event(website_id, session_id, url, event_type, event_value):
    from repositories.event_repository import EventRepository
    return run_query(EventRepository.create, website_id, session_id, url, event_type, event_value)


@track_db_query("get_account")
def get_account(username=""):
    from repositories.account_repository import AccountRepository
    return run_query(AccountRepository.get_by_username, username)


@track_db_query("get_pageviews")
def get_pageviews(website_id, start_at, end_at):
    from repositories.pageview_repository import PageviewRepository
    return run_query(PageviewRepository.get_range, website_id, start_at, end_at)


@track_db_query("get_pageview_data")
def get_pageview_data(website_id, start_at, end_at, timezone="utc", unit="day", count="*"):
    """
    Pageview counts per time bucket.

    Returns a list of {"t": bucket_start, "y": count} ordered by bucket.
    """
    from repositories.pageview_repository import PageviewRepository
    return run_query(PageviewRepository.get_trend, website_id, start_at, end_at, timezone, unit, count)


@track_db_query("get_summary")
def get_summary(website_id, start_at, end_at):
    from repositories.pageview_repository import PageviewRepository
    return run_query(PageviewRepository.get_summary, website_id, start_at, end_at)
