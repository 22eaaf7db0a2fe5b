import logging
from datetime import datetime
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from models import db
from models.merchant import Merchant, MERCHANT_STATUSES
from app.exceptions import ConflictError, NotFoundError
from app.schemas.merchant import MerchantRequest
from app.services.identity import ensure_identity_for_role, sync_identity_status
from app.utils.db import CONFLICT_MESSAGES, conflict_from_integrity
from app.utils.pagination import paginate, enum_filter

logger = logging.getLogger(__name__)

MERCHANT_CODE_PREFIX = "RST-"
MAX_PAGE_SIZE = 200
# order in which colliding values are reported
UNIQUE_FIELDS = ("phone", "email", "gst", "fssai")


def make_merchant_code(merchant_id: int) -> str:
    return f"{MERCHANT_CODE_PREFIX}{merchant_id:06d}"


def safe_status(value) -> str:
    return "inactive" if str(value or "").strip().lower() == "inactive" else "active"


def parse_approved(raw) -> bool:
    """Booleans pass through, the string "false" unapproves, anything else approves."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() != "false"
    return True


def _flush_merchant():
    try:
        db.session.flush()
    except IntegrityError as e:
        raise conflict_from_integrity(e, "merchants") from e


def _get_for_update(merchant_id) -> Merchant:
    merchant = db.session.get(Merchant, merchant_id, with_for_update=True)
    if merchant is None:
        raise NotFoundError("Merchant not found")
    return merchant


def check_merchant_uniqueness(req: MerchantRequest, exclude_id=None):
    """Raise ConflictError for the first of phone, email, gst, fssai already taken.

    Absent values never collide with each other.
    """
    criteria = []
    for field in UNIQUE_FIELDS:
        value = getattr(req, field)
        if value:
            criteria.append(getattr(Merchant, field) == value)
    query = Merchant.query.filter(or_(*criteria))
    if exclude_id is not None:
        query = query.filter(Merchant.id != exclude_id)
    taken = query.all()
    for field in UNIQUE_FIELDS:
        value = getattr(req, field)
        if value and any(getattr(m, field) == value for m in taken):
            raise ConflictError(CONFLICT_MESSAGES[field], field=field)


def _apply_request(merchant: Merchant, req: MerchantRequest):
    merchant.store_name = req.store_name
    merchant.owner_name = req.owner_name
    merchant.phone = req.phone
    merchant.email = req.email
    merchant.address = req.address
    merchant.city = req.city
    merchant.category = req.category
    merchant.gst = req.gst
    merchant.fssai = req.fssai
    merchant.status = req.status or "active"


def create_merchant(req: MerchantRequest) -> Merchant:
    """Create a merchant profile and its merchant identity in the current transaction."""
    check_merchant_uniqueness(req)
    status = req.status or "active"
    user_id = ensure_identity_for_role(
        req.phone,
        "merchant",
        email=req.email,
        names=(req.owner_name, req.store_name),
        address=req.address,
        status=status,
    )

    merchant = Merchant(user_id=user_id, approved_at=None, merchant_code=None)
    _apply_request(merchant, req)
    db.session.add(merchant)
    _flush_merchant()

    merchant.merchant_code = make_merchant_code(merchant.id)
    _flush_merchant()
    logger.info("Merchant %s created as %s for identity %s", merchant.id, merchant.merchant_code, user_id)
    return merchant


def update_merchant(merchant_id: int, req: MerchantRequest) -> Merchant:
    merchant = _get_for_update(merchant_id)
    check_merchant_uniqueness(req, exclude_id=merchant.id)
    user_id = ensure_identity_for_role(
        req.phone,
        "merchant",
        email=req.email,
        names=(req.owner_name, req.store_name),
        address=req.address,
        status=req.status or "active",
        identity_id=merchant.user_id,
    )
    _apply_request(merchant, req)
    merchant.user_id = user_id
    _flush_merchant()
    return merchant


def set_merchant_status(merchant_id: int, status) -> Merchant:
    merchant = _get_for_update(merchant_id)
    merchant.status = safe_status(status)
    sync_identity_status(merchant, merchant.status)
    return merchant


def set_merchant_approval(merchant_id: int, approved: bool, status=None) -> Merchant:
    """Approve (stamp approved_at once) or unapprove; optionally also set and mirror status."""
    merchant = _get_for_update(merchant_id)
    if approved:
        if merchant.approved_at is None:
            merchant.approved_at = datetime.utcnow()
    else:
        merchant.approved_at = None
    if status is not None:
        merchant.status = safe_status(status)
        sync_identity_status(merchant, merchant.status)
    db.session.flush()
    return merchant


def get_merchant(merchant_id: int) -> Merchant:
    merchant = db.session.get(Merchant, merchant_id)
    if merchant is None:
        raise NotFoundError("Merchant not found")
    return merchant


def list_merchants(args, page: int, page_size: int):
    query = Merchant.query
    q = (args.get("q") or "").strip()
    if q:
        like = f"%{q}%"
        query = query.filter(or_(
            Merchant.store_name.ilike(like),
            Merchant.owner_name.ilike(like),
            Merchant.phone.ilike(like),
            Merchant.gst.ilike(like),
            Merchant.fssai.ilike(like),
            Merchant.email.ilike(like),
        ))
    city = (args.get("city") or "").strip()
    if city:
        query = query.filter(Merchant.city == city)
    category = (args.get("category") or "").strip()
    if category:
        query = query.filter(Merchant.category == category)
    status = enum_filter(args.get("status"), MERCHANT_STATUSES)
    if status:
        query = query.filter(Merchant.status == status)
    query = query.order_by(Merchant.id.desc())
    return paginate(query, page, page_size, lambda m: m.to_dict())


def merchant_for_identity(user_id: int, lock=False) -> Merchant:
    """The merchant profile linked to a signed-in identity."""
    query = Merchant.query.filter_by(user_id=user_id)
    if lock:
        query = query.with_for_update()
    merchant = query.order_by(Merchant.id).first()
    if merchant is None:
        raise NotFoundError("Merchant profile not found")
    return merchant


def set_store_open(user_id: int, is_open: bool) -> Merchant:
    """Open or close the store; independent of the merchant's status."""
    merchant = merchant_for_identity(user_id, lock=True)
    merchant.is_open = bool(is_open)
    db.session.flush()
    return merchant
