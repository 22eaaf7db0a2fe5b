from typing import Optional
from pydantic import BaseModel, constr, field_validator
from app.utils.validation import blank_to_none, is_valid_email, is_valid_fssai, is_valid_gst

Text = constr(strip_whitespace=True, min_length=1)


class MerchantRequest(BaseModel):
    """Body for creating or fully replacing a merchant."""

    store_name: Text
    owner_name: Text
    phone: constr(strip_whitespace=True, pattern=r"^\d{10}$")
    email: Optional[str] = None
    address: Optional[str] = None
    city: Text
    category: Text
    gst: Optional[str] = None
    fssai: constr(strip_whitespace=True)
    status: Optional[str] = None

    @field_validator("phone", "fssai", mode="before")
    @classmethod
    def _digits_as_text(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator("email", "address", "gst", "status", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        if v is not None and not is_valid_email(v):
            raise ValueError("Invalid email")
        return v

    @field_validator("gst")
    @classmethod
    def _gst(cls, v):
        if v is not None and not is_valid_gst(v):
            raise ValueError("Invalid GSTIN format")
        return v.upper() if v else v

    @field_validator("fssai")
    @classmethod
    def _fssai(cls, v):
        if not is_valid_fssai(v):
            raise ValueError("FSSAI must be 14 digits")
        return v

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        # anything but "inactive" is treated as active
        return "inactive" if str(v or "").lower() == "inactive" else "active"
