from typing import List, Optional, Union
from pydantic import BaseModel, field_validator


def _clean(v):
    s = "" if v is None else str(v).strip()
    return s or None


class SettingsUpdate(BaseModel):
    """Whole-record settings write; malformed numbers fall back to defaults."""

    zones: Union[List[str], str, None] = None
    operating_hours: Optional[str] = None
    base_delivery_fee: float = 0
    per_km_fee: float = 0
    cancellation_mins: int = 5

    force_update_min_version: Optional[str] = None
    maintenance: bool = False
    announcement: Optional[str] = None

    merchant_commission_pct: float = 0
    rider_commission_pct: float = 0
    payout_cycle: str = "weekly"
    gst_number: Optional[str] = None
    fssai_number: Optional[str] = None

    two_factor: bool = False
    support_phone: Optional[str] = None
    support_email: Optional[str] = None
    sms_provider: Optional[str] = None

    @field_validator("zones", mode="before")
    @classmethod
    def _zones(cls, v):
        if isinstance(v, str):
            return [z.strip() for z in v.split(",") if z.strip()]
        if isinstance(v, (list, tuple)):
            return [str(z).strip() for z in v if str(z).strip()]
        return []

    @field_validator(
        "operating_hours", "force_update_min_version", "announcement", "gst_number",
        "fssai_number", "support_phone", "support_email", "sms_provider",
        mode="before",
    )
    @classmethod
    def _strings(cls, v):
        return _clean(v)

    @field_validator("base_delivery_fee", "per_km_fee", "merchant_commission_pct", "rider_commission_pct", mode="before")
    @classmethod
    def _numbers(cls, v):
        try:
            n = float(v)
        except (TypeError, ValueError):
            return 0
        return n if n == n and n not in (float("inf"), float("-inf")) else 0

    @field_validator("cancellation_mins", mode="before")
    @classmethod
    def _int(cls, v):
        try:
            return int(v)
        except (TypeError, ValueError):
            return 5

    @field_validator("maintenance", "two_factor", mode="before")
    @classmethod
    def _flag(cls, v):
        return v in (True, 1, "1", "true")

    @field_validator("payout_cycle", mode="before")
    @classmethod
    def _cycle(cls, v):
        return "monthly" if v == "monthly" else "weekly"
