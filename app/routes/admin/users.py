from flask import request
from . import admin_bp
from app.services import users as user_service
from app.utils import ok, page_response, page_params, transactional


@admin_bp.route("/users", methods=["GET"])
def list_users():
    page, size = page_params(request.args, max_page_size=user_service.MAX_PAGE_SIZE)
    return page_response(user_service.list_users(request.args, page, size))


@admin_bp.route("/users/<int:user_id>/status", methods=["PUT"])
def set_user_status(user_id):
    body = request.get_json(silent=True) or {}
    with transactional("Failed to update user status"):
        user = user_service.set_user_status(user_id, body.get("status"))
        status = user.status
    return ok(status=status)


@admin_bp.route("/users/<int:user_id>/kyc", methods=["PUT"])
def set_user_kyc(user_id):
    body = request.get_json(silent=True) or {}
    with transactional("Failed to update user KYC"):
        user = user_service.set_user_kyc(user_id, body.get("kyc_status"))
        kyc_status = user.kyc_status
    return ok(kyc_status=kyc_status)
