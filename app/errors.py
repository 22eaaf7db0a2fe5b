import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.exceptions import ServiceError, ConflictError, GENERIC_FAILURE
from app.utils.responses import error
from app.metrics import record_conflict

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(ServiceError)
def handle_service_error(e):
    if e.status_code >= 500:
        # detail is logged where the transaction was rolled back
        return error(GENERIC_FAILURE, status=e.status_code)
    if isinstance(e, ConflictError):
        record_conflict(e.field)
    extra = {"field": e.field} if e.field else {}
    return error(e.message, status=e.status_code, **extra)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(GENERIC_FAILURE, status=500, code=500)
