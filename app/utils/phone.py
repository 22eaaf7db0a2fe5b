import re

TEN_DIGITS = re.compile(r"^\d{10}$")
# Indian mobile numbers start with 6-9
MOBILE = re.compile(r"^[6-9]\d{9}$")


def clean_phone(phone) -> str:
    return str(phone or "").strip()


def is_ten_digit_phone(phone) -> bool:
    return bool(TEN_DIGITS.match(clean_phone(phone)))


def is_mobile_number(phone) -> bool:
    """True for a 10-digit number that can receive an OTP."""
    return bool(MOBILE.match(clean_phone(phone)))


__all__ = ["clean_phone", "is_ten_digit_phone", "is_mobile_number"]
