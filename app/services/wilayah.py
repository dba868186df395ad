import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import QueryError, RowScanError
from app.models.levels import Level
from app.services.query import (
    Query,
    count_all,
    count_by_key,
    placeholder_style,
    select_by_id,
    select_children,
    select_page,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def parse_positive(raw: Optional[str], default: int) -> int:
    """Positive integer from a query string value; anything else gives the default."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def parse_id(raw: Any) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise QueryError(f"invalid id {raw!r}: must be an integer")


def _execute(conn: Connection, engine: Engine, query: Query):
    logger.info("Executing query: %s", query.render(placeholder_style(engine)))
    return conn.execute(query.statement(), query.params())


def _scan_row(row) -> Dict[str, Any]:
    item_id, nama = row[0], row[1]
    if item_id is None or nama is None:
        raise RowScanError(f"NULL value in row {tuple(row)!r}")
    try:
        return {"id": int(item_id), "nama": str(nama)}
    except (TypeError, ValueError) as e:
        raise RowScanError(f"cannot read row {tuple(row)!r}: {e}")


def _scan_rows(result) -> List[Dict[str, Any]]:
    items = []
    for row in result:
        try:
            items.append(_scan_row(row))
        except RowScanError as e:
            logger.error("Error scanning row: %s", e)
    return items


# ==================
# INFO
# ==================

def get_info(engine: Engine) -> Dict[str, int]:
    """Row count of every level's table. One failed count fails the whole call."""
    logger.info("Handling request for info endpoint")
    counts = {}
    with engine.connect() as conn:
        for level in Level:
            logger.info("Counting records in %s table", level.table)
            try:
                counts[level.info_label] = int(_execute(conn, engine, count_all(level)).scalar_one())
            except SQLAlchemyError as e:
                logger.error("Error counting %s: %s", level.table, e)
                raise QueryError(f"Error counting {level.table}") from e
            logger.info("%s count: %d", level.table, counts[level.info_label])

    logger.info("Info request handled successfully")
    return counts


# ==================
# LIST
# ==================

def list_items(
    engine: Engine,
    level: Level,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> List[Dict[str, Any]]:
    page_number = parse_positive(page, DEFAULT_PAGE)
    page_size = parse_positive(limit, DEFAULT_LIMIT)
    offset = (page_number - 1) * page_size

    logger.info(
        "Handling request for %s items. Search query: %s, Page: %d, Limit: %d",
        level.table, search or "", page_number, page_size,
    )

    query = select_page(level, search, page_size, offset)
    try:
        with engine.connect() as conn:
            items = _scan_rows(_execute(conn, engine, query))
    except SQLAlchemyError as e:
        logger.error("Error executing query: %s", e)
        raise QueryError(str(e)) from e

    logger.info("Retrieved %d items from %s", len(items), level.table)
    return items


# ==================
# DETAIL
# ==================

def get_detail(engine: Engine, level: Level, raw_id: Any) -> Dict[str, Any]:
    """
    The item plus a `jumlah_<table>` count for every level below it.

    A count that fails is logged and left out; the rest of the response is
    still returned.
    """
    logger.info("Handling request for %s detail with id: %s", level.table, raw_id)
    item_id = parse_id(raw_id)

    with engine.connect() as conn:
        try:
            row = _execute(conn, engine, select_by_id(level, item_id)).first()
        except SQLAlchemyError as e:
            logger.error("Error retrieving %s detail: %s", level.table, e)
            raise QueryError(str(e)) from e

        if row is None:
            logger.error("Error retrieving %s detail: no row with id %s", level.table, item_id)
            raise QueryError(f"no {level.value} found with id {item_id}")

        try:
            result = _scan_row(row)
        except RowScanError as e:
            logger.error("Error retrieving %s detail: %s", level.table, e)
            raise QueryError(str(e)) from e

        for descendant in level.descendants:
            try:
                count = _execute(conn, engine, count_by_key(descendant, level, item_id)).scalar_one()
            except SQLAlchemyError as e:
                logger.error("Error counting %s: %s", descendant.table, e)
                # a failed statement aborts the transaction on postgres
                conn.rollback()
                continue
            field = f"jumlah_{descendant.table}"
            result[field] = int(count)
            logger.info("Count for %s: %d", descendant.table, result[field])

    logger.info("Retrieved detail for %s with id: %s", level.table, item_id)
    return result


# ==================
# CHILDREN
# ==================

def list_children(engine: Engine, parent: Level, raw_id: Any) -> List[Dict[str, Any]]:
    child = parent.child
    if child is None:
        raise ValueError(f"{parent.value} has no child level")

    logger.info("Handling request for %s of %s with id: %s", child.table, parent.table, raw_id)
    parent_id = parse_id(raw_id)

    try:
        with engine.connect() as conn:
            items = _scan_rows(_execute(conn, engine, select_children(parent, parent_id)))
    except SQLAlchemyError as e:
        logger.error("Error querying %s: %s", child.table, e)
        raise QueryError(str(e)) from e

    logger.info("Retrieved %d %s for %s with id: %s", len(items), child.table, parent.table, parent_id)
    return items
