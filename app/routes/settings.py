from flask import Blueprint
from app.version import API_PREFIX
from app.services import settings as settings_service
from app.utils import ok, transactional

settings_bp = Blueprint("settings", __name__, url_prefix=API_PREFIX)


@settings_bp.route("/settings", methods=["GET"])
def public_settings():
    """App-facing subset of the platform settings.
    ---
    tags:
      - Settings
    """
    with transactional("Failed to load settings"):
        data = settings_service.public_settings(settings_service.load_settings())
    return ok(data)
