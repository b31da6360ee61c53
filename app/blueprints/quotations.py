"""Quotations blueprint: JSON API for the quotation lifecycle."""
from functools import wraps

from flask import Blueprint, request, jsonify, send_file, current_app, g

from app.database import get_session
from app.exceptions import SfvError, ValidationError
from app.middleware import require_login
from app.blueprints.metrics import record_operation
from app.services.quotation_service import (
    list_quotations,
    get_quotation,
    create_quotation,
    update_quotation,
    approve_quotation,
    delete_quotation,
)
from app.services.quotation_pdf_service import generate_quotation_pdf
from app.services.settings_service import (
    get_settings,
    pricing_defaults,
    serialize_settings,
    company_defaults_from_config,
)

quotations_bp = Blueprint('quotations', __name__, url_prefix='/api/quotations')


def counted(operation):
    """Record the outcome of a quotation operation in Prometheus."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                response = f(*args, **kwargs)
            except SfvError as e:
                record_operation(operation, 'rejected' if e.status_code < 500 else 'error')
                raise
            except Exception:
                record_operation(operation, 'error')
                raise
            record_operation(operation, 'success')
            return response
        return decorated_function
    return decorator


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _current_settings(db_session):
    return get_settings(db_session, company_defaults_from_config(current_app.config))


@quotations_bp.route('', methods=['GET'])
@require_login
def list_all():
    """List quotations (newest first) with optional status, q and mine filters."""
    created_by = g.user.email if request.args.get('mine') in ('1', 'true', 'yes') else None
    quotations = list_quotations(
        get_session(),
        g.user,
        status=request.args.get('status'),
        search=request.args.get('q'),
        created_by=created_by
    )
    return jsonify(quotations), 200


@quotations_bp.route('/<int:quotation_id>', methods=['GET'])
@require_login
def get_one(quotation_id):
    return jsonify(get_quotation(get_session(), g.user, quotation_id)), 200


@quotations_bp.route('', methods=['POST'])
@require_login
@counted('create')
def create():
    """Create a Draft quotation authored by the caller."""
    db_session = get_session()
    data = _json_body()
    settings = _current_settings(db_session)

    result = create_quotation(
        db_session,
        g.user,
        data,
        defaults=pricing_defaults(settings),
        ref_prefix=current_app.config.get('QUOTE_REF_PREFIX', 'SFV')
    )
    return jsonify({'message': 'Quotation saved successfully', **result}), 201


@quotations_bp.route('/<int:quotation_id>', methods=['PUT'])
@require_login
@counted('update')
def update(quotation_id):
    update_quotation(get_session(), g.user, quotation_id, _json_body())
    return jsonify({'message': 'Quotation updated successfully'}), 200


@quotations_bp.route('/<int:quotation_id>/approve', methods=['PUT'])
@require_login
@counted('approve')
def approve(quotation_id):
    approve_quotation(get_session(), g.user, quotation_id)
    return jsonify({'message': 'Quotation approved successfully'}), 200


@quotations_bp.route('/<int:quotation_id>', methods=['DELETE'])
@require_login
@counted('delete')
def delete(quotation_id):
    delete_quotation(get_session(), g.user, quotation_id)
    return jsonify({'message': 'Quotation deleted successfully'}), 200


@quotations_bp.route('/<int:quotation_id>/pdf', methods=['GET'])
@require_login
@counted('pdf')
def download_pdf(quotation_id):
    """Generate and download the quotation PDF."""
    db_session = get_session()
    settings = serialize_settings(_current_settings(db_session))
    pdf_buffer, filename = generate_quotation_pdf(db_session, g.user, quotation_id, settings)

    return send_file(
        pdf_buffer,
        mimetype='application/pdf',
        as_attachment=True,
        download_name=filename
    )
