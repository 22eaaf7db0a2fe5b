import logging
import secrets
from datetime import datetime, timedelta
from models import db
from models.user import OTP, User
from models.merchant import Merchant
from app.exceptions import ForbiddenError, ValidationError
from app.services.identity import upsert_identity_by_phone
from app.utils.jwt import create_access_token, create_refresh_token

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def issue_otp(phone: str, ttl_minutes: int) -> str:
    """Create a fresh OTP for ``phone``, retiring any unused ones.

    The identity is created on first contact so its role is fixed by the
    profiles that already exist for the number.
    """
    upsert_identity_by_phone(phone)
    OTP.query.filter_by(phone=phone, used=False).update({"used": True})
    code = generate_otp()
    db.session.add(OTP(
        phone=phone,
        code=code,
        expires_at=datetime.utcnow() + timedelta(minutes=ttl_minutes),
        used=False,
    ))
    db.session.flush()
    return code


def verify_otp(phone: str, code: str) -> User:
    otp = (
        OTP.query.filter_by(phone=phone, code=code, used=False)
        .order_by(OTP.id.desc())
        .first()
    )
    if otp is None:
        raise ValidationError("Invalid OTP")
    if otp.expires_at < datetime.utcnow():
        raise ValidationError("OTP expired")
    otp.used = True

    user = upsert_identity_by_phone(phone)
    if user.status != "active":
        raise ForbiddenError("Account not active")
    db.session.flush()
    return user


def merchant_for(user: User):
    if user.role != "merchant":
        return None
    return Merchant.query.filter_by(user_id=user.id).first()


def issue_tokens(user: User) -> dict:
    merchant = merchant_for(user)
    return {
        "access_token": create_access_token(
            user.id, user.role, user.phone, merchant_id=merchant.id if merchant else None
        ),
        "refresh_token": create_refresh_token(user.id),
        "role": user.role,
        "user": {"id": user.id, "phone": user.phone, "name": user.name},
        "merchant_id": merchant.id if merchant else None,
    }
