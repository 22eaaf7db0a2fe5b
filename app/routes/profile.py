from flask import Blueprint, request, g
from app.version import API_PREFIX
from app.schemas.profile import IdentityProfilePatch
from app.services import users as user_service
from app.utils import ok, auth_required, transactional, validate_schema

profile_bp = Blueprint("profile", __name__, url_prefix=f"{API_PREFIX}/profile")


@profile_bp.before_request
@auth_required
def _enforce_auth():
    """Any active identity may read and edit its own record."""
    return None


@profile_bp.route("", methods=["GET"])
def get_profile():
    """Identity record of the caller.
    ---
    tags:
      - Profile
    """
    return ok(user_service.get_own_profile(g.user_id))


@profile_bp.route("", methods=["PATCH"])
@validate_schema(IdentityProfilePatch)
def patch_profile():
    """Edit name, address or profile image path of the caller.
    ---
    tags:
      - Profile
    """
    patch: IdentityProfilePatch = request.validated_data
    with transactional("Failed to update profile"):
        user, applied = user_service.update_own_profile(g.user_id, patch)
        data = user.to_dict()
    return ok(data, updated=applied)
