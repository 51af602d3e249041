"""
TurtleWatch Backend - Database Error Classification
====================================================

What:  Decides whether a failed statement was a uniqueness or foreign-key
       violation, and wraps everything else into InternalError.
How:   Reads the structured error the driver attached to SQLAlchemy's
       IntegrityError (`exc.orig`) instead of parsing messages:

       Driver              Unique                     Foreign key
       ─────────────────   ────────────────────────   ──────────────────────────
       asyncpg / psycopg   sqlstate 23505             sqlstate 23503
       sqlite3 (aiosqlite) SQLITE_CONSTRAINT_UNIQUE   SQLITE_CONSTRAINT_FOREIGNKEY

       PostgreSQL drivers also report the violated constraint name; when a
       constraint is passed in, it has to match. SQLite does not report one.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from turtlewatch.exceptions import InternalError, TurtleWatchError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

# sqlite3 extended result codes
SQLITE_CONSTRAINT_FOREIGNKEY = 787
SQLITE_CONSTRAINT_UNIQUE = 2067


def _driver_errors(exc: BaseException) -> List[BaseException]:
    """The DBAPI error plus whatever it chained from (asyncpg raises underneath)."""
    orig = getattr(exc, "orig", None) or exc
    chain = [orig]
    for linked in (orig.__cause__, orig.__context__):
        if linked is not None and linked not in chain:
            chain.append(linked)
    return chain


def _sqlstate(errors: List[BaseException]) -> Optional[str]:
    for err in errors:
        state = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if state:
            return state
    return None


def _sqlite_code(errors: List[BaseException]) -> Optional[int]:
    for err in errors:
        code = getattr(err, "sqlite_errorcode", None)
        if code is not None:
            return code
    return None


def _constraint_name(errors: List[BaseException]) -> Optional[str]:
    for err in errors:
        name = getattr(err, "constraint_name", None)
        if name:
            return name
        diag = getattr(err, "diag", None)
        if diag is not None and getattr(diag, "constraint_name", None):
            return diag.constraint_name
    return None


def _matches(
    exc: BaseException, sqlstate: str, sqlite_code: int, constraint: Optional[str]
) -> bool:
    errors = _driver_errors(exc)
    if _sqlstate(errors) != sqlstate and _sqlite_code(errors) != sqlite_code:
        return False
    if constraint is None:
        return True
    reported = _constraint_name(errors)
    return reported is None or reported == constraint


def is_unique_violation(exc: BaseException, constraint: Optional[str] = None) -> bool:
    """Does this failure represent a uniqueness violation (on `constraint`)?"""
    return _matches(exc, UNIQUE_VIOLATION, SQLITE_CONSTRAINT_UNIQUE, constraint)


def is_foreign_key_violation(exc: BaseException, constraint: Optional[str] = None) -> bool:
    """Does this failure represent a missing referenced row (on `constraint`)?"""
    return _matches(exc, FOREIGN_KEY_VIOLATION, SQLITE_CONSTRAINT_FOREIGNKEY, constraint)


@contextmanager
def error_boundary(action: str, **context: Any) -> Iterator[None]:
    """
    Service-level error boundary.

    Application exceptions pass through unchanged; anything else is logged
    with its context and re-raised as InternalError (generic 500 message).

    Usage:
        with error_boundary("creating nest", nest_code=code):
            ...
    """
    try:
        yield
    except TurtleWatchError:
        raise
    except Exception as e:
        logger.error(
            "Database error while %s: %s | Context: %s",
            action,
            str(e),
            context,
            exc_info=True,
        )
        raise InternalError(
            context={"action": action, "error_type": type(e).__name__, **context},
        ) from e
