from flask import request, g
from . import merchant_bp
from app.services import merchants as merchant_service
from app.utils import ok, role_required, transactional


def _wants_open(body) -> bool:
    if "is_open" in body:
        return body.get("is_open") in (True, 1, "1", "true")
    return body.get("store_status") == "open"


@merchant_bp.route("/me", methods=["GET"])
@role_required("merchant:view_profile")
def me():
    """Merchant profile of the signed-in identity.
    ---
    tags:
      - Merchant
    """
    return ok(merchant_service.merchant_for_identity(g.user_id).to_dict())


@merchant_bp.route("/me/store-status", methods=["PATCH"])
@role_required("merchant:toggle_store")
def store_status():
    """Open or close the store.
    ---
    tags:
      - Merchant
    """
    body = request.get_json(silent=True) or {}
    with transactional("Failed to update store status"):
        merchant = merchant_service.set_store_open(g.user_id, _wants_open(body))
        is_open = bool(merchant.is_open)
    return ok(status="open" if is_open else "closed", is_open=is_open)
