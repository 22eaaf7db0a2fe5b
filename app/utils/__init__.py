from .responses import ok, error, validation_error_response, page_response
from .auth import auth_required, role_required
from .validation import validate_schema, is_valid_email, is_valid_gst, is_valid_fssai
from .db import transactional
from .pagination import page_params, paginate, enum_filter
from .jwt import (
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)
from .phone import clean_phone, is_ten_digit_phone, is_mobile_number

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'page_response',
    'auth_required',
    'role_required',
    'create_access_token',
    'create_refresh_token',
    'decode_token',
    'TokenError',
    'validate_schema',
    'is_valid_email',
    'is_valid_gst',
    'is_valid_fssai',
    'transactional',
    'page_params',
    'paginate',
    'enum_filter',
    'clean_phone',
    'is_ten_digit_phone',
    'is_mobile_number',
]
