"""Materials blueprint: catalog of priced materials."""
from flask import Blueprint, request, jsonify, g

from app.database import get_session
from app.exceptions import ValidationError
from app.middleware import require_login
from app.decorators.permissions import admin_only
from app.services.material_service import (
    list_materials,
    get_material,
    create_material,
    update_material,
    delete_material,
    serialize_material,
)

materials_bp = Blueprint('materials', __name__, url_prefix='/api/materials')


def _json_body():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


@materials_bp.route('', methods=['GET'])
@require_login
def list_all():
    """List materials ordered by id, optionally filtered by q and category."""
    materials = list_materials(
        get_session(),
        search=request.args.get('q'),
        category=request.args.get('category')
    )
    return jsonify(materials), 200


@materials_bp.route('/<int:material_id>', methods=['GET'])
@require_login
def get_one(material_id):
    return jsonify(serialize_material(get_material(get_session(), material_id))), 200


@materials_bp.route('', methods=['POST'])
@admin_only
def create():
    material = create_material(get_session(), g.user, _json_body())
    return jsonify(serialize_material(material)), 201


@materials_bp.route('/<int:material_id>', methods=['PUT'])
@admin_only
def update(material_id):
    material = update_material(get_session(), g.user, material_id, _json_body())
    return jsonify(serialize_material(material)), 200


@materials_bp.route('/<int:material_id>', methods=['DELETE'])
@admin_only
def delete(material_id):
    delete_material(get_session(), g.user, material_id)
    return jsonify({'message': 'Material deleted successfully'}), 200
