from app.routes import (
    auth_bp,
    admin_bp,
    merchant_bp,
    rider_bp,
    settings_bp,
    profile_bp,
)


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(merchant_bp)
    app.register_blueprint(rider_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(profile_bp)
