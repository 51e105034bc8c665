from typing import Optional

from sqlalchemy.exc import IntegrityError


class StorefrontError(Exception):
    pass


class NotFoundError(StorefrontError):
    def __init__(self, term: str, entity: str = "Product"):
        self.term = term
        self.entity = entity
        super().__init__(f"{entity} with '{term}' not found")


class ValidationError(StorefrontError):
    """Uniqueness conflict reported by the store (duplicate slug, title, email...)."""

    def __init__(self, detail: str, field: Optional[str] = None):
        self.detail = detail
        self.field = field
        super().__init__(detail)


class PersistenceError(StorefrontError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Persistence failure: {cause}")


class UnauthorizedError(StorefrontError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


PG_UNIQUE_VIOLATION = "23505"
MYSQL_DUP_ENTRY = 1062


def is_unique_violation(exc: BaseException) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] == MYSQL_DUP_ENTRY:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _conflicting_field(exc: IntegrityError) -> Optional[str]:
    # sqlite: "UNIQUE constraint failed: products.slug"
    msg = str(exc.orig)
    if "UNIQUE constraint failed:" in msg:
        col = msg.split("UNIQUE constraint failed:", 1)[1].strip().split(",")[0]
        return col.rsplit(".", 1)[-1]
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        # postgres default naming: <table>_<column>_key
        return constraint.rsplit("_", 1)[0].split("_", 1)[-1]
    return None


def translate_db_error(exc: BaseException) -> StorefrontError:
    """Map a store-layer failure to ValidationError (uniqueness) or PersistenceError."""
    if is_unique_violation(exc):
        field = _conflicting_field(exc)
        detail = getattr(getattr(exc.orig, "diag", None), "message_detail", None)
        if not detail:
            detail = f"Key ({field}) already exists" if field else "Duplicate value"
        return ValidationError(detail, field=field)
    return PersistenceError(exc)
