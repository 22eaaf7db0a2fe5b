from .onboarding.auth import auth_bp
from .admin import admin_bp
from .merchant import merchant_bp
from .rider import rider_bp
from .settings import settings_bp
from .profile import profile_bp


__all__ = [
    'auth_bp',
    'admin_bp',
    'merchant_bp',
    'rider_bp',
    'settings_bp',
    'profile_bp',
]
