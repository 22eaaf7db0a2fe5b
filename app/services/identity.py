"""Identity records and their reconciliation with role profiles.

Nothing here commits: callers run these inside ``transactional`` together
with the profile write so identity and profile land (or fail) as one unit.
"""
import logging
from datetime import datetime
from typing import Iterable, Optional
from sqlalchemy.exc import IntegrityError
from models import db
from models.user import User, Admin
from models.merchant import Merchant
from models.rider import DeliveryBoy
from app.utils.db import conflict_from_integrity
from app.metrics import record_reconciliation

logger = logging.getLogger(__name__)


def _first_non_empty(candidates: Iterable[Optional[str]]) -> str:
    for name in candidates:
        if name and str(name).strip():
            return str(name).strip()
    return ""


def _flush_identity():
    try:
        db.session.flush()
    except IntegrityError as e:
        # lost a race against a concurrent insert of the same contact
        raise conflict_from_integrity(e, "users") from e


def _lookup(identity_id=None, phone=None, email=None):
    """Find one identity by id, else phone, else email."""
    if identity_id:
        user = db.session.get(User, identity_id, with_for_update=True)
        if user:
            return user, "id"
    if phone:
        user = User.query.filter_by(phone=phone).with_for_update().first()
        if user:
            return user, "phone"
    if email:
        user = User.query.filter_by(email=email).with_for_update().first()
        if user:
            return user, "email"
    return None, None


def ensure_identity_for_role(
    phone: str,
    role: str,
    *,
    email: Optional[str] = None,
    names: Iterable[Optional[str]] = (),
    address: Optional[str] = None,
    status: str = "active",
    identity_id: Optional[int] = None,
) -> int:
    """Make sure an identity with ``role`` exists for this contact; return its id.

    An existing identity is promoted to ``role`` and given ``status``; its
    name and address are only filled when empty. When the caller passes the
    already linked ``identity_id`` the identity's phone/email follow the new
    contact values. Moving a linked identity onto a phone or email already
    held by another identity raises a ConflictError; the two are never merged.
    """
    display_name = _first_non_empty(names)
    user, matched_by = _lookup(identity_id, phone, email)

    if user is None:
        user = User(
            phone=phone,
            email=email or None,
            address=address or "",
            role=role,
            status=status,
            kyc_status="pending",
            name=display_name,
        )
        db.session.add(user)
        _flush_identity()
        logger.info("Created %s identity %s", role, user.id)
        record_reconciliation(role, "created")
        return user.id

    if user.role != role:
        logger.info("Identity %s role %s -> %s", user.id, user.role, role)
    user.role = role
    user.status = status
    if not (user.name or "").strip() and display_name:
        user.name = display_name
    if not (user.address or "").strip() and address:
        user.address = address
    if matched_by == "id":
        user.phone = phone
        if email:
            user.email = email
    elif email and not user.email:
        user.email = email
    user.updated_at = datetime.utcnow()
    _flush_identity()
    record_reconciliation(role, "reconciled")
    return user.id


def resolve_linked_identity(identity_id=None, phone=None, email=None) -> Optional[User]:
    """Resolve the identity behind a profile for status propagation.

    Fallback chain for rows whose linkage was never populated: the stored
    identity id first, then the profile's phone, then its email.
    """
    user, _ = _lookup(identity_id, phone, email)
    return user


def sync_identity_status(profile, status: str) -> Optional[User]:
    """Mirror ``status`` onto the identity behind ``profile`` (same transaction)."""
    user = resolve_linked_identity(
        getattr(profile, "user_id", None),
        getattr(profile, "phone", None),
        getattr(profile, "email", None),
    )
    if user is None:
        logger.warning("No identity found to sync status for %r", profile)
        return None
    user.status = status
    user.updated_at = datetime.utcnow()
    if hasattr(profile, "user_id") and not profile.user_id:
        profile.user_id = user.id
    db.session.flush()
    return user


def infer_role(has_merchant: bool, has_rider: bool, has_admin: bool) -> str:
    """Pick the default role for a first-contact identity."""
    if has_merchant:
        return "merchant"
    if has_rider:
        return "rider"
    if has_admin:
        return "admin"
    return "customer"


def infer_role_for_phone(phone: str) -> str:
    """Role for ``phone``: existing identity, then merchant, rider, admin stores."""
    user = User.query.filter_by(phone=phone).first()
    if user:
        return user.role
    has_merchant = db.session.query(Merchant.id).filter(Merchant.phone == phone).first() is not None
    has_rider = (
        db.session.query(DeliveryBoy.id)
        .join(User, User.id == DeliveryBoy.user_id)
        .filter(User.phone == phone)
        .first()
        is not None
    )
    has_admin = db.session.query(Admin.id).filter(Admin.phone == phone).first() is not None
    return infer_role(has_merchant, has_rider, has_admin)


def upsert_identity_by_phone(phone: str) -> User:
    """Return the identity for ``phone``, creating it on first contact."""
    user = User.query.filter_by(phone=phone).first()
    if user:
        return user
    user = User(phone=phone, role=infer_role_for_phone(phone), status="active", kyc_status="pending")
    db.session.add(user)
    _flush_identity()
    return user

