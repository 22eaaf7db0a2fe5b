from datetime import datetime
from models import db

SETTINGS_ROW_ID = 1
PAYOUT_CYCLES = ("weekly", "monthly")


class AppSettings(db.Model):
    """Single-row platform configuration, read and written as a whole."""

    __tablename__ = "app_settings"

    id = db.Column(db.Integer, primary_key=True)
    zones = db.Column(db.JSON, nullable=True)
    operating_hours = db.Column(db.String(32), nullable=True)
    base_delivery_fee = db.Column(db.Float, default=0)
    per_km_fee = db.Column(db.Float, default=0)
    cancellation_mins = db.Column(db.Integer, default=5)

    force_update_min_version = db.Column(db.String(20), nullable=True)
    maintenance = db.Column(db.Boolean, default=False)
    announcement = db.Column(db.String(255), nullable=True)

    merchant_commission_pct = db.Column(db.Float, default=0)
    rider_commission_pct = db.Column(db.Float, default=0)
    payout_cycle = db.Column(db.String(10), default="weekly")
    gst_number = db.Column(db.String(32), nullable=True)
    fssai_number = db.Column(db.String(32), nullable=True)

    two_factor = db.Column(db.Boolean, default=False)
    support_phone = db.Column(db.String(32), nullable=True)
    support_email = db.Column(db.String(128), nullable=True)
    sms_provider = db.Column(db.String(64), nullable=True)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "zones": list(self.zones or []),
            "operating_hours": self.operating_hours,
            "base_delivery_fee": float(self.base_delivery_fee or 0),
            "per_km_fee": float(self.per_km_fee or 0),
            "cancellation_mins": int(self.cancellation_mins if self.cancellation_mins is not None else 5),
            "force_update_min_version": self.force_update_min_version,
            "maintenance": bool(self.maintenance),
            "announcement": self.announcement,
            "merchant_commission_pct": float(self.merchant_commission_pct or 0),
            "rider_commission_pct": float(self.rider_commission_pct or 0),
            "payout_cycle": self.payout_cycle or "weekly",
            "gst_number": self.gst_number,
            "fssai_number": self.fssai_number,
            "two_factor": bool(self.two_factor),
            "support_phone": self.support_phone,
            "support_email": self.support_email,
            "sms_provider": self.sms_provider,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
