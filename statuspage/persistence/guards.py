from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from statuspage.core.errors import ConflictError, ReferentialViolationError


_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(exc: IntegrityError) -> str | None:
    # asyncpg exposes the SQLSTATE on the adapted DBAPI error; SQLite has none.
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def is_unique_violation(exc: IntegrityError) -> bool:
    state = _sqlstate(exc)
    if state is not None:
        return state == _PG_UNIQUE_VIOLATION
    return "unique" in str(exc.orig).lower()


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    state = _sqlstate(exc)
    if state is not None:
        return state == _PG_FOREIGN_KEY_VIOLATION
    return "foreign key" in str(exc.orig).lower()


def translate_integrity_error(
    exc: IntegrityError,
    *,
    conflict_message: str | None = None,
) -> ConflictError | ReferentialViolationError:
    # Surface the raw constraint text; callers chain with `from exc`.
    if conflict_message is not None and is_unique_violation(exc):
        return ConflictError(conflict_message)
    label = "Foreign key" if is_foreign_key_violation(exc) else "Integrity"
    return ReferentialViolationError(
        f"{label} constraint violation: {exc.orig}",
        details={"constraint_error": str(exc.orig)},
    )
