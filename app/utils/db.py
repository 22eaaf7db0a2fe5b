from contextlib import contextmanager
import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from models import db
from app.exceptions import ServiceError, ConflictError, TransientStoreError

logger = logging.getLogger(__name__)

# table -> {constraint suffix: column reported as the conflicting field}
UNIQUE_COLUMNS = {
    "merchants": {"phone": "phone", "email": "email", "gst": "gst", "fssai": "fssai", "code": "merchant_code"},
    "users": {"phone": "phone", "email": "email"},
    "delivery_boys": {"user": "user_id"},
}

CONFLICT_MESSAGES = {
    "phone": "Phone already exists",
    "email": "Email already exists",
    "gst": "GST already exists",
    "fssai": "FSSAI already exists",
    "merchant_code": "Merchant code already exists",
    "user_id": "Rider profile already exists",
}


def conflict_field(exc: IntegrityError, table: str = None):
    """Return the unique column an IntegrityError refers to, if recognisable.

    MySQL and PostgreSQL name the constraint (``uq_merchants_gst``) while
    SQLite names the column (``merchants.gst``); both are accepted.
    """
    text = str(getattr(exc, "orig", exc)).lower()
    for tbl, columns in UNIQUE_COLUMNS.items():
        if table and tbl != table:
            continue
        for suffix, column in columns.items():
            if f"uq_{tbl}_{suffix}" in text or f"{tbl}.{column}" in text:
                return column
    return None


def conflict_from_integrity(exc: IntegrityError, table: str = None) -> ConflictError:
    field = conflict_field(exc, table)
    if field:
        return ConflictError(CONFLICT_MESSAGES[field], field=field)
    return ConflictError()


@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Commits on success; on any failure the whole unit is rolled back before
    the error propagates, with store failures mapped onto the API taxonomy.
    """
    try:
        yield
        db.session.commit()
    except ServiceError as e:
        db.session.rollback()
        logger.info("%s: %s", message, e.message)
        raise
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("%s: %s", message, e.orig)
        raise conflict_from_integrity(e) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("%s: %s", message, e, exc_info=True)
        raise TransientStoreError() from e
    except Exception as e:
        logger.error("%s: %s", message, e, exc_info=True)
        db.session.rollback()
        raise
