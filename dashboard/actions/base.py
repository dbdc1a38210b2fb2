# dashboard/actions/base.py

import logging
from typing import Optional, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable

from dashboard.actions.results import ExecutionFailure, Success
from dashboard.cache import PageCache, get_page_cache
from dashboard.db.engine import get_engine

logger = logging.getLogger(__name__)


def execute_statement(
    stmt: Executable,
    *,
    operation: str,
    failure_message: str,
    engine: Optional[Engine] = None,
) -> Optional[ExecutionFailure]:
    """
    Run one write statement in its own transaction.

    Store errors are not re-raised: the details go to the log and the caller
    gets an ExecutionFailure carrying `failure_message`.
    """
    engine = engine or get_engine()
    try:
        with engine.begin() as conn:
            result = conn.execute(stmt)
    except SQLAlchemyError as e:
        logger.warning("%s failed: %s", operation, e.__class__.__name__)
        logger.debug("%s failure details", operation, exc_info=True)
        return ExecutionFailure(failure_message)

    logger.info("%s succeeded (%s rows)", operation, result.rowcount)
    return None


def revalidate_and_redirect(
    path: str,
    *,
    also: Sequence[str] = (),
    cache: Optional[PageCache] = None,
    message: Optional[str] = None,
) -> Success:
    """Revalidate `path` and every listing in `also`, then send the browser to `path`."""
    cache = cache or get_page_cache()
    for stale in (path, *also):
        cache.revalidate_path(stale)
    return Success(next_path=path, message=message)
