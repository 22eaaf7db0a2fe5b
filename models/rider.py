from datetime import datetime
from models import db, BIGINT

ONLINE_STATUSES = ("online", "offline")
RIDER_KYC_STATUSES = ("pending", "approved", "rejected")
APPROVAL_STATUSES = ("pending", "approved", "rejected")


class DeliveryBoy(db.Model):
    __tablename__ = "delivery_boys"
    __table_args__ = (
        db.UniqueConstraint("user_id", name="uq_delivery_boys_user"),
    )

    id = db.Column(BIGINT, primary_key=True)
    user_id = db.Column(BIGINT, db.ForeignKey("users.id"), nullable=False)
    vehicle = db.Column(db.String(50), default="Bike")
    vehicle_number = db.Column(db.String(20), nullable=True)
    license_no = db.Column(db.String(30), nullable=True)
    aadhaar = db.Column(db.String(20), nullable=True)
    bank_name = db.Column(db.String(100), nullable=True)
    account_no = db.Column(db.String(34), nullable=True)
    ifsc = db.Column(db.String(11), nullable=True)
    upi = db.Column(db.String(100), nullable=True)
    area = db.Column(db.String(100), nullable=True)
    online_status = db.Column(db.String(10), nullable=False, default="offline")
    kyc_status = db.Column(db.String(20), nullable=False, default="pending")
    # gates order eligibility, independent of kyc_status
    approval_status = db.Column(db.String(20), nullable=False, default="pending")
    rejected_reason = db.Column(db.String(255), nullable=True)
    approved_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("rider_profile", uselist=False, lazy=True))

    def __repr__(self):
        return f"<DeliveryBoy id={self.id} user_id={self.user_id} approval={self.approval_status}>"
