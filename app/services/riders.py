import logging
from datetime import datetime
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from models import db
from models.user import User, USER_STATUSES
from models.rider import DeliveryBoy, RIDER_KYC_STATUSES, APPROVAL_STATUSES
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.schemas.rider import RiderCreateRequest, RiderProfilePatch, RiderBankPatch
from app.services.identity import ensure_identity_for_role
from app.utils.db import conflict_from_integrity
from app.utils.pagination import paginate, enum_filter

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

# request key -> (model, attribute)
PROFILE_PATCH_FIELDS = {
    "name": (User, "name"),
    "address": (User, "address"),
    "vehicle": (DeliveryBoy, "vehicle"),
    "vehicle_no": (DeliveryBoy, "vehicle_number"),
    "license_no": (DeliveryBoy, "license_no"),
    "aadhaar": (DeliveryBoy, "aadhaar"),
    "area": (DeliveryBoy, "area"),
}

BANK_PATCH_FIELDS = {
    "bank_name": (DeliveryBoy, "bank_name"),
    "account_no": (DeliveryBoy, "account_no"),
    "ifsc": (DeliveryBoy, "ifsc"),
    "upi": (DeliveryBoy, "upi"),
}


def _require_choice(value, allowed, name):
    value = str(value or "").strip().lower()
    if value not in allowed:
        raise ValidationError(f"{name} must be {'|'.join(allowed)}")
    return value


def normalize_kyc_status(value) -> str:
    return _require_choice(value, RIDER_KYC_STATUSES, "kyc_status")


def normalize_approval_status(value) -> str:
    return _require_choice(value, APPROVAL_STATUSES, "approval_status")


def normalize_user_status(value) -> str:
    return _require_choice(value, USER_STATUSES, "status")


def _get_rider(user_id: int, require_profile=True, lock=True):
    query = User.query.filter(User.id == user_id, User.role == "rider")
    if lock:
        query = query.with_for_update()
    user = query.first()
    if user is None:
        raise NotFoundError("Rider not found")
    profile_query = DeliveryBoy.query.filter_by(user_id=user.id)
    if lock:
        profile_query = profile_query.with_for_update()
    profile = profile_query.first()
    if profile is None and require_profile:
        raise NotFoundError("Rider profile not found")
    return user, profile


def _apply_patch(targets, field_map, values):
    applied = []
    for key, (model, attr) in field_map.items():
        if key in values:
            setattr(targets[model], attr, values[key])
            applied.append(key)
    return applied


def create_rider(req: RiderCreateRequest):
    """Create the rider identity and its delivery profile; returns (user_id, profile)."""
    if User.query.filter_by(phone=req.phone).first():
        raise ConflictError("Phone already exists", field="phone")
    if req.email and User.query.filter_by(email=req.email).first():
        raise ConflictError("Email already exists", field="email")

    user_id = ensure_identity_for_role(
        req.phone,
        "rider",
        email=req.email,
        names=(req.name,),
        address=req.address,
        status=req.status or "active",
    )
    approval = req.approval_status or "pending"
    profile = DeliveryBoy(
        user_id=user_id,
        vehicle=req.vehicle or "Bike",
        vehicle_number=req.vehicle_no,
        license_no=req.license_no,
        aadhaar=req.aadhaar,
        bank_name=req.bank_name,
        account_no=req.account_no,
        ifsc=req.ifsc,
        upi=req.upi,
        area=req.area,
        online_status="online" if req.online else "offline",
        kyc_status=req.kyc_status or "pending",
        approval_status=approval,
        approved_at=datetime.utcnow() if approval == "approved" else None,
    )
    db.session.add(profile)
    try:
        db.session.flush()
    except IntegrityError as e:
        raise conflict_from_integrity(e) from e
    logger.info("Rider profile %s created for identity %s", profile.id, user_id)
    return user_id, profile


def update_rider_profile(user_id: int, patch: RiderProfilePatch):
    user, profile = _get_rider(user_id)
    values = patch.model_dump(exclude_unset=True, exclude_none=True)
    applied = _apply_patch({User: user, DeliveryBoy: profile}, PROFILE_PATCH_FIELDS, values)
    if applied:
        now = datetime.utcnow()
        user.updated_at = now
        profile.updated_at = now
    db.session.flush()
    return applied


def update_rider_bank(user_id: int, patch: RiderBankPatch):
    _, profile = _get_rider(user_id)
    values = patch.model_dump(exclude_unset=True, exclude_none=True)
    applied = _apply_patch({DeliveryBoy: profile}, BANK_PATCH_FIELDS, values)
    db.session.flush()
    return applied


def set_rider_online(user_id: int, online: bool) -> str:
    _, profile = _get_rider(user_id)
    profile.online_status = "online" if online else "offline"
    db.session.flush()
    return profile.online_status


def set_rider_kyc(user_id: int, kyc_status: str) -> str:
    _, profile = _get_rider(user_id)
    profile.kyc_status = kyc_status
    db.session.flush()
    return kyc_status


def set_rider_approval(user_id: int, approval_status: str, reason=None) -> DeliveryBoy:
    """Move the order-eligibility gate.

    approved stamps approved_at and clears rejected_reason; rejected records
    the reason and clears approved_at; pending clears both.
    """
    _, profile = _get_rider(user_id)
    if approval_status == "approved":
        if profile.approval_status != "approved" or profile.approved_at is None:
            profile.approved_at = datetime.utcnow()
    else:
        profile.approved_at = None
    profile.approval_status = approval_status
    profile.rejected_reason = (reason or None) if approval_status == "rejected" else None
    db.session.flush()
    return profile


def set_rider_status(user_id: int, status: str) -> str:
    user, _ = _get_rider(user_id, require_profile=False)
    user.status = status
    user.updated_at = datetime.utcnow()
    db.session.flush()
    return status


def soft_delete_rider(user_id: int):
    """Inactivate the identity, take the rider offline and reset approval; rows are kept."""
    user, profile = _get_rider(user_id, require_profile=False)
    now = datetime.utcnow()
    user.status = "inactive"
    user.updated_at = now
    if profile is not None:
        profile.online_status = "offline"
        profile.approval_status = "pending"
        profile.updated_at = now
    db.session.flush()
    logger.info("Rider %s soft-deleted", user_id)


def _iso(value):
    return value.isoformat() if value else None


def rider_row(user: User, profile: DeliveryBoy = None) -> dict:
    p = profile
    return {
        "user_id": user.id,
        "name": user.name,
        "phone": user.phone,
        "email": user.email,
        "address": user.address,
        "user_status": user.status,
        "user_kyc_status": user.kyc_status,
        "user_created_at": _iso(user.created_at),
        "rider_id": p.id if p else None,
        "vehicle": p.vehicle if p else None,
        "vehicle_number": p.vehicle_number if p else None,
        "license_no": p.license_no if p else None,
        "aadhaar": p.aadhaar if p else None,
        "bank_name": p.bank_name if p else None,
        "account_no": p.account_no if p else None,
        "ifsc": p.ifsc if p else None,
        "upi": p.upi if p else None,
        "area": p.area if p else None,
        "online_status": p.online_status if p else "offline",
        "kyc_status": p.kyc_status if p else "pending",
        "approval_status": p.approval_status if p else "pending",
        "rejected_reason": p.rejected_reason if p else None,
        "approved_at": _iso(p.approved_at) if p else None,
        "rider_created_at": _iso(p.created_at) if p else None,
    }


def get_rider(user_id: int) -> dict:
    user, profile = _get_rider(user_id, require_profile=False, lock=False)
    return rider_row(user, profile)


def list_riders(args, page: int, page_size: int):
    query = (
        db.session.query(User, DeliveryBoy)
        .outerjoin(DeliveryBoy, DeliveryBoy.user_id == User.id)
        .filter(User.role == "rider")
    )
    q = (args.get("q") or "").strip()
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            User.name.ilike(like),
            User.phone.ilike(like),
            User.email.ilike(like),
            DeliveryBoy.area.ilike(like),
            DeliveryBoy.vehicle_number.ilike(like),
            DeliveryBoy.license_no.ilike(like),
        ))
    status = enum_filter(args.get("status"), USER_STATUSES)
    if status:
        query = query.filter(User.status == status)
    kyc = enum_filter(args.get("kyc"), RIDER_KYC_STATUSES)
    if kyc:
        query = query.filter(DeliveryBoy.kyc_status == kyc)
    approval = enum_filter(args.get("approval"), APPROVAL_STATUSES)
    if approval:
        query = query.filter(DeliveryBoy.approval_status == approval)
    online = args.get("online")
    if online in ("1", "0"):
        query = query.filter(DeliveryBoy.online_status == ("online" if online == "1" else "offline"))
    query = query.order_by(User.id.desc())
    return paginate(query, page, page_size, lambda row: rider_row(*row))


def get_own_rider(user_id: int) -> dict:
    user, profile = _get_rider(user_id, lock=False)
    return rider_row(user, profile)
