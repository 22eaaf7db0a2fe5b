from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required, ok
from app.services.users import platform_stats

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")


@admin_bp.before_request
@auth_required
@role_required("admin")
def _enforce_admin_role():
    """Ensure the requester is an authenticated admin."""
    return None


@admin_bp.route("/stats", methods=["GET"])
def stats():
    return ok(platform_stats())


from . import merchants  # noqa: E402,F401
from . import riders  # noqa: E402,F401
from . import users  # noqa: E402,F401
from . import settings  # noqa: E402,F401

__all__ = ["admin_bp"]
