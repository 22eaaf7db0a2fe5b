from flask import jsonify


def ok(data=None, status_code=200, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload), status_code


def error(message, status=400, code=None, **extra):
    payload = {
        "ok": False,
        "message": message,
        "code": code or status,
    }
    payload.update(extra)
    return jsonify(payload), status


def validation_error_response(errors):
    return error("Validation error", status=400, errors=errors)


def page_response(page):
    """Render a listing result as ``{page, pageSize, total, rows}``."""
    return jsonify({
        "ok": True,
        "page": page["page"],
        "pageSize": page["pageSize"],
        "total": page["total"],
        "rows": page["rows"],
    }), 200
