from flask import request
from . import admin_bp
from app.schemas.rider import RiderCreateRequest, RiderProfilePatch, RiderBankPatch
from app.services import riders as rider_service
from app.utils import ok, page_response, page_params, transactional, validate_schema


@admin_bp.route("/riders", methods=["POST"])
@validate_schema(RiderCreateRequest)
def create_rider():
    """Create a rider identity with its delivery profile."""
    data: RiderCreateRequest = request.validated_data
    with transactional("Failed to create rider"):
        user_id, profile = rider_service.create_rider(data)
        rider_id = profile.id
    return ok(status_code=201, id=user_id, rider_id=rider_id)


@admin_bp.route("/riders", methods=["GET"])
def list_riders():
    page, size = page_params(request.args, max_page_size=rider_service.MAX_PAGE_SIZE)
    return page_response(rider_service.list_riders(request.args, page, size))


@admin_bp.route("/riders/<int:user_id>", methods=["GET"])
def get_rider(user_id):
    return ok(rider_service.get_rider(user_id))


@admin_bp.route("/riders/<int:user_id>/profile", methods=["PATCH"])
@validate_schema(RiderProfilePatch)
def update_rider_profile(user_id):
    patch: RiderProfilePatch = request.validated_data
    with transactional("Failed to update rider profile"):
        applied = rider_service.update_rider_profile(user_id, patch)
    return ok(updated=applied)


@admin_bp.route("/riders/<int:user_id>/bank", methods=["PATCH"])
@validate_schema(RiderBankPatch)
def update_rider_bank(user_id):
    patch: RiderBankPatch = request.validated_data
    with transactional("Failed to update rider bank details"):
        applied = rider_service.update_rider_bank(user_id, patch)
    return ok(updated=applied)


@admin_bp.route("/riders/<int:user_id>/online", methods=["PATCH"])
def set_rider_online(user_id):
    body = request.get_json(silent=True) or {}
    with transactional("Failed to update rider online status"):
        online_status = rider_service.set_rider_online(user_id, bool(body.get("online")))
    return ok(online_status=online_status)


@admin_bp.route("/riders/<int:user_id>/kyc", methods=["PATCH"])
def set_rider_kyc(user_id):
    body = request.get_json(silent=True) or {}
    kyc_status = rider_service.normalize_kyc_status(body.get("kyc_status"))
    with transactional("Failed to update rider KYC"):
        rider_service.set_rider_kyc(user_id, kyc_status)
    return ok(kyc_status=kyc_status)


@admin_bp.route("/riders/<int:user_id>/approval", methods=["PATCH"])
def set_rider_approval(user_id):
    body = request.get_json(silent=True) or {}
    approval = rider_service.normalize_approval_status(body.get("approval_status"))
    with transactional("Failed to update rider approval"):
        profile = rider_service.set_rider_approval(user_id, approval, body.get("reason"))
        approved_at = profile.approved_at.isoformat() if profile.approved_at else None
        reason = profile.rejected_reason
    return ok(approval_status=approval, approved_at=approved_at, rejected_reason=reason)


@admin_bp.route("/riders/<int:user_id>/status", methods=["PATCH"])
def set_rider_status(user_id):
    body = request.get_json(silent=True) or {}
    status = rider_service.normalize_user_status(body.get("status"))
    with transactional("Failed to update rider status"):
        rider_service.set_rider_status(user_id, status)
    return ok(status=status)


@admin_bp.route("/riders/<int:user_id>", methods=["DELETE"])
def delete_rider(user_id):
    """Soft delete: the identity is inactivated and the rider taken offline."""
    with transactional("Failed to delete rider"):
        rider_service.soft_delete_rider(user_id)
    return ok()
