from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required

rider_bp = Blueprint("rider", __name__, url_prefix=f"{API_PREFIX}/delivery")


@rider_bp.before_request
@auth_required
@role_required("rider")
def _enforce_rider_role():
    """Ensure the requester is an authenticated rider."""
    return None


from . import profile  # noqa: E402,F401
