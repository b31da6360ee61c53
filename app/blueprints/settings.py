"""Settings blueprint: company details and pricing defaults for quotations."""
from flask import Blueprint, request, jsonify, current_app, g

from app.database import get_session
from app.exceptions import ValidationError
from app.middleware import require_login
from app.decorators.permissions import admin_only
from app.services.settings_service import (
    get_settings,
    update_settings,
    serialize_settings,
    company_defaults_from_config,
)

settings_bp = Blueprint('settings', __name__, url_prefix='/api/quotation-settings')


@settings_bp.route('', methods=['GET'])
@require_login
def show():
    settings = get_settings(get_session(), company_defaults_from_config(current_app.config))
    return jsonify(serialize_settings(settings)), 200


@settings_bp.route('', methods=['PUT'])
@admin_only
def update():
    """Update settings; unknown keys are ignored."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    settings = update_settings(
        get_session(), g.user, data, company_defaults_from_config(current_app.config)
    )
    return jsonify({
        'message': 'Settings updated successfully',
        'settings': serialize_settings(settings),
    }), 200
