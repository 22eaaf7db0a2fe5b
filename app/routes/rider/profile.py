from flask import request, g
from . import rider_bp
from app.services import riders as rider_service
from app.utils import ok, role_required, transactional


@rider_bp.route("/me", methods=["GET"])
@role_required("rider:view_profile")
def me():
    """Delivery profile of the signed-in rider.
    ---
    tags:
      - Rider
    """
    return ok(rider_service.get_own_rider(g.user_id))


@rider_bp.route("/me/online-status", methods=["PATCH"])
@role_required("rider:toggle_online")
def online_status():
    """Go online or offline.
    ---
    tags:
      - Rider
    """
    body = request.get_json(silent=True) or {}
    online = body.get("online_status") == "online"
    with transactional("Failed to update online status"):
        status = rider_service.set_rider_online(g.user_id, online)
    return ok(online_status=status)
