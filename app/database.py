import logging
from typing import Iterable, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.config import build_database_url
from app.exceptions import StartupError
from app.models.levels import Level
from app.services.query import placeholder_style, probe_table

logger = logging.getLogger(__name__)


def connect(url: URL) -> Engine:
    """Create the shared engine and make sure the database answers."""
    logger.info("Attempting to connect to %s database at %s:%s...", url.get_backend_name(), url.host, url.port)
    try:
        engine = create_engine(url)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, ImportError) as e:
        logger.error("Error connecting to database: %s", e)
        raise StartupError(f"Error connecting to database: {e}") from e

    logger.info("Successfully connected to the database")
    return engine


def verify_tables(engine: Engine, levels: Iterable[Level] = tuple(Level)):
    logger.info("Checking if required tables exist...")
    style = placeholder_style(engine)
    with engine.connect() as conn:
        for level in levels:
            query = probe_table(level)
            logger.info("Checking table: %s", level.table)
            try:
                conn.execute(query.statement(), query.params()).fetchall()
            except SQLAlchemyError as e:
                logger.error("Table %s does not exist: %s (%s)", level.table, e, query.render(style))
                raise StartupError(f"Table {level.table} does not exist: {e}") from e
            logger.info("Table %s exists", level.table)
    logger.info("All required tables exist")


def init_database(url: Optional[URL] = None) -> Engine:
    logger.info("Initializing database connection...")
    engine = connect(url or build_database_url())
    try:
        verify_tables(engine)
    except StartupError:
        engine.dispose()
        raise
    return engine


def get_engine(request: Request) -> Engine:
    return request.app.state.engine
