import re
from functools import wraps
from flask import request
from pydantic import ValidationError
from .responses import validation_error_response

EMAIL = re.compile(r"^([^\s@]+)@([^\s@]+\.[^\s@]+)$")
# 2 digits, 5 letters, 4 digits, letter, entity code, literal Z, check character
GSTIN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$", re.IGNORECASE)
FSSAI = re.compile(r"^\d{14}$")


def is_valid_email(value) -> bool:
    return bool(EMAIL.match(str(value or "").strip()))


def is_valid_gst(value) -> bool:
    return bool(GSTIN.match(str(value or "").strip()))


def is_valid_fssai(value) -> bool:
    return bool(FSSAI.match(str(value or "").strip()))


def blank_to_none(value):
    """Treat empty or whitespace-only strings as absent."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def validate_schema(schema):
    """Decorator to validate request JSON against a Pydantic schema.

    Runs before the view, so malformed input never opens a transaction.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                body = {}
            try:
                obj = schema(**body)
            except ValidationError as ve:
                return validation_error_response(
                    ve.errors(include_url=False, include_context=False, include_input=False)
                )
            request.validated_data = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator
