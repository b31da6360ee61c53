"""Material catalog service."""
from datetime import datetime, timezone
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import SfvError, ValidationError, NotFoundError, StorageError
from app.models import Material, QuotationItem, AuditAction
from app.services.audit_service import log_action
from app.utils.formatters import iso_utc, to_number
from app.utils.number_format import parse_decimal

logger = logging.getLogger(__name__)


def serialize_material(material):
    return {
        'id': material.id,
        'name': material.name,
        'category': material.category,
        'unit': material.unit,
        'unit_price': to_number(material.unit_price),
        'last_updated': iso_utc(material.last_updated),
    }


def _read_material(data):
    name = (data.get('name') or '').strip()
    if not name:
        raise ValidationError('Material name is required')
    return {
        'name': name,
        'category': (data.get('category') or '').strip() or None,
        'unit': (data.get('unit') or '').strip() or None,
        'unit_price': parse_decimal(data.get('unit_price'), 'unit_price', default=0, allow_negative=False),
        'last_updated': datetime.now(timezone.utc),
    }


def list_materials(session, search=None, category=None):
    query = session.query(Material)
    if category:
        query = query.filter(Material.category == category)
    if search:
        query = query.filter(Material.name.ilike(f'%{search.strip()}%'))
    return [serialize_material(m) for m in query.order_by(Material.id.asc()).all()]


def get_material(session, material_id):
    material = session.query(Material).filter(Material.id == material_id).first()
    if not material:
        raise NotFoundError('Material not found')
    return material


def create_material(session, actor, data):
    fields = _read_material(data or {})
    try:
        material = Material(**fields)
        session.add(material)
        session.flush()
        log_action(session, actor, AuditAction.MATERIAL_CREATED, 'material', material.id, {
            'name': material.name, 'unit_price': material.unit_price
        })
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to create material: {e}")
        raise StorageError('Failed to create material') from e
    return material


def update_material(session, actor, material_id, data):
    """Update a catalog entry. Existing quotation items keep their snapshot."""
    try:
        material = get_material(session, material_id)
        old_price = material.unit_price
        for name, value in _read_material(data or {}).items():
            setattr(material, name, value)
        log_action(session, actor, AuditAction.MATERIAL_UPDATED, 'material', material.id, {
            'old_price': old_price, 'new_price': material.unit_price
        })
        session.commit()
    except SfvError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to update material {material_id}: {e}")
        raise StorageError('Failed to update material') from e
    return material


def delete_material(session, actor, material_id):
    """Remove a material; quotation items referencing it become custom items."""
    try:
        material = get_material(session, material_id)
        session.query(QuotationItem).filter(
            QuotationItem.material_id == material.id
        ).update({QuotationItem.material_id: None}, synchronize_session='fetch')
        session.delete(material)
        log_action(session, actor, AuditAction.MATERIAL_DELETED, 'material', material_id, {
            'name': material.name
        })
        session.commit()
    except SfvError:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to delete material {material_id}: {e}")
        raise StorageError('Failed to delete material') from e
