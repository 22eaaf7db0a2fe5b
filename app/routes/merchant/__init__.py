from flask import Blueprint
from app.version import API_PREFIX
from app.utils import auth_required, role_required

merchant_bp = Blueprint("merchant", __name__, url_prefix=f"{API_PREFIX}/merchant")


@merchant_bp.before_request
@auth_required
@role_required("merchant")
def _enforce_merchant_role():
    """Ensure the requester is an authenticated merchant."""
    return None


from . import profile  # noqa: E402,F401
