from datetime import datetime
from sqlalchemy import or_
from models import db
from models.user import User, ROLES, USER_STATUSES
from models.merchant import Merchant
from models.rider import DeliveryBoy
from app.exceptions import NotFoundError, ValidationError
from app.schemas.profile import IdentityProfilePatch
from app.utils.pagination import paginate, enum_filter

MAX_PAGE_SIZE = 200
# identity-level KYC as reviewed by back office
USER_KYC_VALUES = ("pending", "verified", "rejected")

# request key -> User attribute
SELF_PROFILE_FIELDS = {
    "name": "name",
    "address": "address",
    "profile_image": "profile_image",
}


def _get_user(user_id: int) -> User:
    user = db.session.get(User, user_id, with_for_update=True)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(args, page: int, page_size: int):
    query = User.query
    role = enum_filter(args.get("role"), ROLES)
    if role:
        query = query.filter(User.role == role)
    status = enum_filter(args.get("status"), USER_STATUSES)
    if status:
        query = query.filter(User.status == status)
    search = (args.get("search") or args.get("q") or "").strip()
    if search:
        like = f"%{search}%"
        query = query.filter(or_(User.name.ilike(like), User.phone.ilike(like), User.email.ilike(like)))
    query = query.order_by(User.id.desc())
    return paginate(query, page, page_size, lambda u: u.to_dict())


def set_user_status(user_id: int, status) -> User:
    """Direct identity status edit; profile status is left alone."""
    status = str(status or "").strip().lower()
    if status not in USER_STATUSES:
        raise ValidationError("Invalid status")
    user = _get_user(user_id)
    user.status = status
    user.updated_at = datetime.utcnow()
    db.session.flush()
    return user


def set_user_kyc(user_id: int, kyc_status) -> User:
    kyc_status = str(kyc_status or "").strip().lower()
    if kyc_status not in USER_KYC_VALUES:
        raise ValidationError("Invalid KYC status")
    user = _get_user(user_id)
    user.kyc_status = kyc_status
    user.updated_at = datetime.utcnow()
    db.session.flush()
    return user


def get_own_profile(user_id: int) -> dict:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user.to_dict()


def update_own_profile(user_id: int, patch: IdentityProfilePatch):
    """Apply the fields present in ``patch``; role, status and contact stay admin-owned."""
    user = _get_user(user_id)
    values = patch.model_dump(exclude_unset=True, exclude_none=True)
    applied = []
    for key, attr in SELF_PROFILE_FIELDS.items():
        if key in values:
            setattr(user, attr, values[key])
            applied.append(key)
    if applied:
        user.updated_at = datetime.utcnow()
    db.session.flush()
    return user, applied


def platform_stats() -> dict:
    return {
        "merchants": Merchant.query.filter_by(status="active").count(),
        "riders": DeliveryBoy.query.count(),
        "pendingRiderApprovals": DeliveryBoy.query.filter_by(approval_status="pending").count(),
        "customers": User.query.filter_by(role="customer").count(),
    }
