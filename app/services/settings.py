from models import db
from models.settings import AppSettings, SETTINGS_ROW_ID
from app.schemas.settings import SettingsUpdate

DEFAULTS = {
    "zones": ["HSR", "BTM"],
    "operating_hours": "09:00-22:00",
    "base_delivery_fee": 25.0,
    "per_km_fee": 5.0,
    "cancellation_mins": 5,
    "force_update_min_version": "1.0.0",
    "maintenance": False,
    "merchant_commission_pct": 10.0,
    "rider_commission_pct": 80.0,
    "payout_cycle": "weekly",
    "two_factor": False,
}

PUBLIC_KEYS = (
    "zones",
    "operating_hours",
    "base_delivery_fee",
    "per_km_fee",
    "cancellation_mins",
    "force_update_min_version",
    "maintenance",
    "announcement",
    "support_phone",
    "support_email",
)


def load_settings() -> AppSettings:
    """Return the settings row, seeding defaults the first time."""
    row = db.session.get(AppSettings, SETTINGS_ROW_ID)
    if row is None:
        row = AppSettings(id=SETTINGS_ROW_ID, **DEFAULTS)
        db.session.add(row)
        db.session.flush()
    return row


def save_settings(update: SettingsUpdate) -> AppSettings:
    row = load_settings()
    for key, value in update.model_dump().items():
        setattr(row, key, value)
    db.session.flush()
    return row


def public_settings(row: AppSettings) -> dict:
    data = row.to_dict()
    return {key: data[key] for key in PUBLIC_KEYS}
