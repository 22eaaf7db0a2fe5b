from flask import request
from . import admin_bp
from app.schemas.settings import SettingsUpdate
from app.services import settings as settings_service
from app.utils import ok, transactional, validate_schema


@admin_bp.route("/settings", methods=["GET"])
def get_settings():
    with transactional("Failed to load settings"):
        data = settings_service.load_settings().to_dict()
    return ok(data)


@admin_bp.route("/settings", methods=["PATCH"])
@validate_schema(SettingsUpdate)
def update_settings():
    update: SettingsUpdate = request.validated_data
    with transactional("Failed to save settings"):
        data = settings_service.save_settings(update).to_dict()
    return ok(data)
