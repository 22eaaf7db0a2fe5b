# --- models/user.py ---
from datetime import datetime
from models import db, BIGINT

ROLES = ("admin", "merchant", "rider", "customer")
USER_STATUSES = ("active", "inactive", "suspended")
USER_KYC_STATUSES = ("pending", "verified", "approved", "rejected")


class User(db.Model):
    """One row per person, whatever their role."""

    __tablename__ = "users"
    __table_args__ = (
        db.UniqueConstraint("phone", name="uq_users_phone"),
        db.UniqueConstraint("email", name="uq_users_email"),
    )

    id = db.Column(BIGINT, primary_key=True)
    phone = db.Column(db.String(15), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(120), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    role = db.Column(db.String(20), nullable=False, default="customer")
    status = db.Column(db.String(20), nullable=False, default="active")
    kyc_status = db.Column(db.String(20), nullable=False, default="pending")
    aadhaar = db.Column(db.String(20), nullable=True)
    profile_image = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "role": self.role,
            "status": self.status,
            "kyc_status": self.kyc_status,
            "aadhaar": self.aadhaar,
            "profile_image": self.profile_image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<User id={self.id} phone={self.phone} role={self.role}>"


# --- OTP Model ---
class OTP(db.Model):
    __tablename__ = "otps"

    id = db.Column(BIGINT, primary_key=True)
    phone = db.Column(db.String(15), nullable=False, index=True)
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    used = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<OTP phone={self.phone} used={self.used}>"


class Admin(db.Model):
    """Back-office staff directory, consulted when inferring a role at first contact."""

    __tablename__ = "admins"

    id = db.Column(BIGINT, primary_key=True)
    phone = db.Column(db.String(15), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
