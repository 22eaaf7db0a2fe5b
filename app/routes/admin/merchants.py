from flask import request
from . import admin_bp
from app.schemas.merchant import MerchantRequest
from app.services import merchants as merchant_service
from app.utils import ok, page_response, page_params, transactional, validate_schema


@admin_bp.route("/merchants", methods=["POST"])
@validate_schema(MerchantRequest)
def create_merchant():
    """Create a merchant together with its merchant identity."""
    data: MerchantRequest = request.validated_data
    with transactional("Failed to create merchant"):
        merchant = merchant_service.create_merchant(data)
    return ok(status_code=201, id=merchant.id, merchant_code=merchant.merchant_code, user_id=merchant.user_id)


@admin_bp.route("/merchants", methods=["GET"])
def list_merchants():
    page, size = page_params(request.args, max_page_size=merchant_service.MAX_PAGE_SIZE)
    return page_response(merchant_service.list_merchants(request.args, page, size))


@admin_bp.route("/merchants/<int:merchant_id>", methods=["GET"])
def get_merchant(merchant_id):
    return ok(merchant_service.get_merchant(merchant_id).to_dict())


@admin_bp.route("/merchants/<int:merchant_id>", methods=["PUT"])
@validate_schema(MerchantRequest)
def update_merchant(merchant_id):
    data: MerchantRequest = request.validated_data
    with transactional("Failed to update merchant"):
        merchant = merchant_service.update_merchant(merchant_id, data)
    return ok(user_id=merchant.user_id)


@admin_bp.route("/merchants/<int:merchant_id>/status", methods=["PATCH"])
def set_merchant_status(merchant_id):
    body = request.get_json(silent=True) or {}
    with transactional("Failed to update merchant status"):
        merchant = merchant_service.set_merchant_status(merchant_id, body.get("status"))
    return ok(status=merchant.status)


@admin_bp.route("/merchants/<int:merchant_id>/approve", methods=["PATCH"])
def approve_merchant(merchant_id):
    body = request.get_json(silent=True) or {}
    approved = merchant_service.parse_approved(body.get("approved"))
    with transactional("Failed to update merchant approval"):
        merchant = merchant_service.set_merchant_approval(merchant_id, approved, body.get("status"))
    return ok(
        approved=approved,
        approved_at=merchant.approved_at.isoformat() if merchant.approved_at else None,
    )
