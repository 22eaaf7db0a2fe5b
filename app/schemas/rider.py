from typing import Optional
from pydantic import BaseModel, constr, field_validator
from app.utils.validation import blank_to_none, is_valid_email
from models.user import USER_STATUSES
from models.rider import RIDER_KYC_STATUSES, APPROVAL_STATUSES


class RiderCreateRequest(BaseModel):
    phone: constr(strip_whitespace=True, pattern=r"^\d{10}$")
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    vehicle: Optional[str] = None
    vehicle_no: Optional[str] = None
    license_no: Optional[str] = None
    aadhaar: Optional[str] = None
    bank_name: Optional[str] = None
    account_no: Optional[str] = None
    ifsc: Optional[str] = None
    upi: Optional[str] = None
    area: Optional[str] = None
    online: bool = False
    status: Optional[str] = None
    kyc_status: Optional[str] = None
    approval_status: Optional[str] = None

    @field_validator("phone", mode="before")
    @classmethod
    def _digits_as_text(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator(
        "name", "email", "address", "vehicle", "vehicle_no", "license_no", "aadhaar",
        "bank_name", "account_no", "ifsc", "upi", "area",
        "status", "kyc_status", "approval_status",
        mode="before",
    )
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        if v is not None and not is_valid_email(v):
            raise ValueError("Invalid email")
        return v

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        v = str(v or "").lower()
        return v if v in USER_STATUSES else "active"

    @field_validator("kyc_status")
    @classmethod
    def _kyc(cls, v):
        v = str(v or "").lower()
        return v if v in RIDER_KYC_STATUSES else "pending"

    @field_validator("approval_status")
    @classmethod
    def _approval(cls, v):
        # new riders start pending unless explicitly created otherwise
        v = str(v or "").lower()
        return v if v in APPROVAL_STATUSES else "pending"


class RiderProfilePatch(BaseModel):
    """Every slot optional; only slots present in the body are applied."""

    name: Optional[str] = None
    address: Optional[str] = None
    vehicle: Optional[str] = None
    vehicle_no: Optional[str] = None
    license_no: Optional[str] = None
    aadhaar: Optional[str] = None
    area: Optional[str] = None


class RiderBankPatch(BaseModel):
    bank_name: Optional[str] = None
    account_no: Optional[str] = None
    ifsc: Optional[str] = None
    upi: Optional[str] = None
