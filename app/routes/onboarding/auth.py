import logging
from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from models import db
from models.user import User
from app.version import API_PREFIX
from app.exceptions import UnauthorizedError, ForbiddenError
from app.services import auth as auth_service
from app.tasks.notifications import send_otp_sms_task
from app.schemas.auth import SendOTPRequest, VerifyOTPRequest, RefreshRequest
from app.utils import (
    ok,
    transactional,
    validate_schema,
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


def _phone_key():
    return str((request.get_json(silent=True) or {}).get("phone", ""))


@auth_bp.route("/send-otp", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many OTP requests from this IP",
)
@limiter.limit(
    lambda: current_app.config["OTP_SEND_LIMIT_PER_PHONE"],
    key_func=_phone_key,
    error_message="Too many OTP requests for this phone number",
)
@validate_schema(SendOTPRequest)
def send_otp():
    """Issue a one-time code for an Indian mobile number.
    ---
    tags:
      - Auth
    """
    data: SendOTPRequest = request.validated_data
    with transactional("Failed to create OTP"):
        code = auth_service.issue_otp(data.phone, current_app.config["OTP_TTL_MIN"])

    logger.debug({"event": "otp_issued", "phone": data.phone, "otp": code})
    body = f"Your login code is {code}"
    if current_app.config.get("TESTING"):
        send_otp_sms_task(data.phone, body)
    else:
        send_otp_sms_task.delay(data.phone, body)
    return ok(message="OTP sent")


@auth_bp.route("/verify", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(VerifyOTPRequest)
def verify_otp():
    """Exchange a valid OTP for access and refresh tokens.
    ---
    tags:
      - Auth
    """
    data: VerifyOTPRequest = request.validated_data
    with transactional("Failed to verify OTP"):
        user = auth_service.verify_otp(data.phone, data.code)
        tokens = auth_service.issue_tokens(user)
    logger.info("Tokens issued for identity %s", tokens["user"]["id"])
    return ok(expires_in=current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60, **tokens)


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    try:
        payload = decode_token(data.refresh_token, expected_type="refresh")
    except TokenError as e:
        raise UnauthorizedError(str(e)) from e

    user = db.session.get(User, payload["user_id"])
    if user is None:
        raise UnauthorizedError("Unknown identity")
    if user.status != "active":
        raise ForbiddenError("Account not active")
    merchant = auth_service.merchant_for(user)
    return ok(
        access_token=create_access_token(
            user.id, user.role, user.phone, merchant_id=merchant.id if merchant else None
        ),
        refresh_token=create_refresh_token(user.id),
        expires_in=current_app.config["ACCESS_TOKEN_LIFETIME_MIN"] * 60,
    )


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Tokens are stateless; logout only checks the caller still holds a valid one."""
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise UnauthorizedError("Token missing")
    try:
        decode_token(auth.split(" ", 1)[1].strip())
    except TokenError as e:
        raise UnauthorizedError(str(e)) from e
    return ok(message="Logged out")
