from datetime import datetime
from models import db, BIGINT

MERCHANT_STATUSES = ("active", "inactive")


class Merchant(db.Model):
    __tablename__ = "merchants"
    __table_args__ = (
        db.UniqueConstraint("phone", name="uq_merchants_phone"),
        db.UniqueConstraint("email", name="uq_merchants_email"),
        db.UniqueConstraint("gst", name="uq_merchants_gst"),
        db.UniqueConstraint("fssai", name="uq_merchants_fssai"),
        db.UniqueConstraint("merchant_code", name="uq_merchants_code"),
    )

    id = db.Column(BIGINT, primary_key=True)
    # nullable for legacy rows; reconciliation always sets it
    user_id = db.Column(BIGINT, db.ForeignKey("users.id"), nullable=True, index=True)
    merchant_code = db.Column(db.String(20), nullable=True)
    store_name = db.Column(db.String(150), nullable=False)
    owner_name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(15), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    gst = db.Column(db.String(15), nullable=True)
    fssai = db.Column(db.String(14), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="active")
    approved_at = db.Column(db.DateTime, nullable=True)
    is_open = db.Column(db.Boolean, nullable=False, default=False)
    profile_image = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("merchant_profiles", lazy=True))

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "merchant_code": self.merchant_code,
            "store_name": self.store_name,
            "owner_name": self.owner_name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "city": self.city,
            "category": self.category,
            "gst": self.gst,
            "fssai": self.fssai,
            "status": self.status,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "is_open": bool(self.is_open),
            "profile_image": self.profile_image,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Merchant id={self.id} code={self.merchant_code}>"
