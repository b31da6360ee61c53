"""Quotation service: creation, editing and approval of quotations."""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Any, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.models import Material, QuotationItem, QuotationStatus, AuditAction
from app.exceptions import SfvError, ValidationError, NotFoundError, ConflictError, StorageError
from app.services.audit_service import log_action
from app.services.policy_service import QuotationAction, authorize
from app.services.pricing_service import calculate_totals
from app.services.quotation_repository import QuotationRepository
from app.services.reference_service import generate_ref_no
from app.utils.formatters import iso_utc, to_number
from app.utils.number_format import parse_decimal, parse_int_id

logger = logging.getLogger(__name__)

CUSTOM_ITEM_NAME = 'Custom Item'
CUSTOM_ITEM_CATEGORY = 'N/A'
CUSTOM_ITEM_UNIT = 'pcs'

HEADER_TEXT_FIELDS = ('customer_phone', 'customer_address', 'project_title', 'notes')

# Scales of the stored columns; inputs are rounded to these before pricing
PRICE_SCALE = Decimal('0.01')
QUANTITY_SCALE = Decimal('0.001')
PERCENT_SCALE = Decimal('0.001')


def _to_scale(value, scale):
    try:
        return value.quantize(scale, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f'Number out of range: {value}')


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _read_header(data: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Validate and normalise the customer/purpose fields of a request body."""
    defaults = defaults or {}

    customer_name = _clean(data.get('customer_name'))
    quote_for = _clean(data.get('quote_for'))
    if not customer_name or not quote_for:
        raise ValidationError('Customer name and quote_for are required')

    header = {
        'customer_name': customer_name,
        'quote_for': quote_for,
        'discount_percent': _to_scale(parse_decimal(
            data.get('discount_percent'), 'discount_percent', default=defaults.get('discount_percent') or 0
        ), PERCENT_SCALE),
        'vat_percent': _to_scale(parse_decimal(
            data.get('vat_percent'), 'vat_percent', default=defaults.get('vat_percent') or 0
        ), PERCENT_SCALE),
    }
    for name in HEADER_TEXT_FIELDS:
        header[name] = _clean(data.get(name))
    return header


def _first(item, *keys):
    for key in keys:
        if item.get(key) is not None:
            return item[key]
    return None


def _resolve_items(session, raw_items) -> List[Dict[str, Any]]:
    """
    Turn request items into server-trusted line data.

    Catalog-backed items take name, category, unit and price from the
    material as it is now; the client's price is ignored. Custom items keep
    what the client sent.
    """
    if raw_items is None:
        return []
    if not isinstance(raw_items, list):
        raise ValidationError('items must be a list')

    parsed = []
    for index, item in enumerate(raw_items, start=1):
        if not isinstance(item, dict):
            raise ValidationError(f'Item {index} is malformed')

        parsed.append({
            'material_id': parse_int_id(item.get('material_id'), f'Item {index} material_id'),
            'quantity': _to_scale(parse_decimal(
                _first(item, 'quantity', 'qty'), f'Item {index} quantity', default=0, allow_negative=False
            ), QUANTITY_SCALE),
            'unit_price': _to_scale(parse_decimal(
                item.get('unit_price'), f'Item {index} unit_price', default=0, allow_negative=False
            ), PRICE_SCALE),
            'name': _clean(_first(item, 'material_name', 'name')),
            'category': _clean(_first(item, 'material_category', 'category')),
            'unit': _clean(_first(item, 'material_unit', 'unit')),
        })

    # Batch fetch catalog materials
    material_ids = {p['material_id'] for p in parsed if p['material_id']}
    materials = {}
    if material_ids:
        materials = {
            m.id: m for m in session.query(Material).filter(Material.id.in_(material_ids)).all()
        }
        missing = sorted(material_ids - set(materials))
        if missing:
            raise NotFoundError(f'Material {missing[0]} not found')

    resolved = []
    for line in parsed:
        material = materials.get(line['material_id'])
        if material is not None:
            price = _to_scale(Decimal(str(material.unit_price)), PRICE_SCALE)
            resolved.append({
                'material_id': material.id,
                'material_name': material.name,
                'material_category': material.category,
                'material_unit': material.unit,
                'material_unit_price': price,
                'quantity': line['quantity'],
                'unit_price': price,
            })
        else:
            resolved.append({
                'material_id': None,
                'material_name': line['name'] or CUSTOM_ITEM_NAME,
                'material_category': line['category'] or CUSTOM_ITEM_CATEGORY,
                'material_unit': line['unit'] or CUSTOM_ITEM_UNIT,
                'material_unit_price': line['unit_price'],
                'quantity': line['quantity'],
                'unit_price': line['unit_price'],
            })
    return resolved


def _price(header, resolved):
    pricing = calculate_totals(
        [(line['quantity'], line['unit_price']) for line in resolved],
        discount_percent=header['discount_percent'],
        vat_percent=header['vat_percent'],
    )
    items = [
        QuotationItem(total_price=total, created_at=datetime.now(timezone.utc), **line)
        for line, total in zip(resolved, pricing.line_totals)
    ]
    return pricing, items


def _storage_failure(repo, operation, error):
    repo.rollback()
    logger.exception(f"Storage failure during {operation}: {error}")
    return StorageError()


def serialize_item(item) -> Dict[str, Any]:
    return {
        'id': item.id,
        'material_id': item.material_id,
        'material_name': item.material_name,
        'material_category': item.material_category,
        'material_unit': item.material_unit,
        'material_unit_price': to_number(item.material_unit_price),
        'quantity': to_number(item.quantity),
        'unit_price': to_number(item.unit_price),
        'total_price': to_number(item.total_price),
        'created_at': iso_utc(item.created_at),
    }


def serialize_quotation(quotation, items=None, item_count=None, total_amount=None) -> Dict[str, Any]:
    """JSON representation of a quotation header (plus items or aggregates)."""
    data = {
        'id': quotation.id,
        'ref_no': quotation.ref_no,
        'customer_name': quotation.customer_name,
        'customer_phone': quotation.customer_phone,
        'customer_address': quotation.customer_address,
        'quote_for': quotation.quote_for,
        'project_title': quotation.project_title,
        'status': quotation.status,
        'created_by': quotation.created_by,
        'notes': quotation.notes,
        'subtotal': to_number(quotation.subtotal),
        'discount_percent': to_number(quotation.discount_percent),
        'discount_amount': to_number(quotation.discount_amount),
        'vat_percent': to_number(quotation.vat_percent),
        'vat_amount': to_number(quotation.vat_amount),
        'total': to_number(quotation.total),
        'approved_by': quotation.approved_by,
        'created_at': iso_utc(quotation.created_at),
        'approved_at': iso_utc(quotation.approved_at),
    }
    if item_count is not None:
        data['item_count'] = int(item_count)
        data['total_amount'] = to_number(total_amount)
    if items is not None:
        data['items'] = [serialize_item(item) for item in items]
    return data


def create_quotation(session, actor, data: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None,
                     ref_prefix: str = 'SFV') -> Dict[str, Any]:
    """
    Create a Draft quotation authored by ``actor``.

    ``defaults`` supplies discount_percent/vat_percent when the body omits them.

    Returns:
        {'id', 'ref_no', 'created_at'}
    """
    authorize(actor, QuotationAction.CREATE)
    header = _read_header(data or {}, defaults)
    repo = QuotationRepository(session)

    try:
        resolved = _resolve_items(session, (data or {}).get('items'))
        pricing, items = _price(header, resolved)
        now = datetime.now(timezone.utc)

        header.update(pricing.as_header_fields())
        header.update(
            ref_no=generate_ref_no(ref_prefix, now),
            status=QuotationStatus.DRAFT.value,
            created_by=actor.email,
            created_at=now,
        )
        quotation = repo.create(header, items)

        log_action(session, actor, AuditAction.QUOTATION_CREATED, 'quotation', quotation.id, {
            'ref_no': quotation.ref_no,
            'total': pricing.grand_total,
            'item_count': len(items),
        })
        repo.commit()
    except SfvError:
        repo.rollback()
        raise
    except SQLAlchemyError as e:
        raise _storage_failure(repo, 'save quotation', e) from e

    logger.info(f"Quotation {quotation.ref_no} created by {actor.email}")
    return {'id': quotation.id, 'ref_no': quotation.ref_no, 'created_at': iso_utc(now)}


def update_quotation(session, actor, quotation_id: int, data: Dict[str, Any]) -> None:
    """
    Replace a quotation's header fields and full item set.

    Status and ref_no are never changed here.
    """
    repo = QuotationRepository(session)

    try:
        quotation = repo.get_for_update(quotation_id)
        if not quotation:
            raise NotFoundError('Quotation not found')

        authorize(actor, QuotationAction.EDIT, quotation)

        # Omitted percentages keep their stored values
        header = _read_header(data or {}, defaults={
            'discount_percent': quotation.discount_percent,
            'vat_percent': quotation.vat_percent,
        })
        resolved = _resolve_items(session, (data or {}).get('items'))
        pricing, items = _price(header, resolved)

        header.update(pricing.as_header_fields())
        repo.replace_items(quotation, items)
        repo.update_header(quotation, header)

        log_action(session, actor, AuditAction.QUOTATION_UPDATED, 'quotation', quotation.id, {
            'ref_no': quotation.ref_no,
            'total': pricing.grand_total,
            'item_count': len(items),
        })
        repo.commit()
    except SfvError:
        repo.rollback()
        raise
    except SQLAlchemyError as e:
        raise _storage_failure(repo, 'update quotation', e) from e

    logger.info(f"Quotation {quotation.ref_no} updated by {actor.email}")


def approve_quotation(session, actor, quotation_id: int) -> None:
    """Approve a quotation. Financial fields are left as last saved."""
    repo = QuotationRepository(session)

    try:
        quotation = repo.get(quotation_id)
        if not quotation:
            raise NotFoundError('Quotation not found')

        authorize(actor, QuotationAction.APPROVE, quotation)

        if quotation.is_approved:
            raise ConflictError('Quotation already approved')

        # Conditional update: a concurrent approval leaves nothing to change
        if not repo.set_approved(quotation.id, actor.email, datetime.now(timezone.utc)):
            raise ConflictError('Quotation already approved')

        log_action(session, actor, AuditAction.QUOTATION_APPROVED, 'quotation', quotation.id, {
            'ref_no': quotation.ref_no,
        })
        repo.commit()
    except SfvError:
        repo.rollback()
        raise
    except SQLAlchemyError as e:
        raise _storage_failure(repo, 'approve quotation', e) from e

    logger.info(f"Quotation {quotation.ref_no} approved by {actor.email}")


def delete_quotation(session, actor, quotation_id: int) -> None:
    """Delete a quotation and its items (author on drafts, admin always)."""
    repo = QuotationRepository(session)

    try:
        quotation = repo.get_for_update(quotation_id)
        if not quotation:
            raise NotFoundError('Quotation not found')

        authorize(actor, QuotationAction.DELETE, quotation)

        ref_no = quotation.ref_no
        repo.delete(quotation)
        log_action(session, actor, AuditAction.QUOTATION_DELETED, 'quotation', quotation_id, {
            'ref_no': ref_no,
        })
        repo.commit()
    except SfvError:
        repo.rollback()
        raise
    except SQLAlchemyError as e:
        raise _storage_failure(repo, 'delete quotation', e) from e

    logger.info(f"Quotation {ref_no} deleted by {actor.email}")


def get_quotation(session, actor, quotation_id: int) -> Dict[str, Any]:
    """Quotation header with its items."""
    authorize(actor, QuotationAction.VIEW)
    repo = QuotationRepository(session)
    quotation = repo.get(quotation_id)
    if not quotation:
        raise NotFoundError('Quotation not found')
    return serialize_quotation(quotation, items=repo.get_items(quotation.id))


def list_quotations(session, actor, status: Optional[str] = None, search: Optional[str] = None,
                    created_by: Optional[str] = None) -> List[Dict[str, Any]]:
    """All quotations, newest first, with item_count and total_amount."""
    authorize(actor, QuotationAction.VIEW)
    if status:
        try:
            status = QuotationStatus(status.strip().capitalize()).value
        except ValueError:
            raise ValidationError(f'Unknown status "{status}"')

    rows = QuotationRepository(session).list(status=status, search=_clean(search), created_by=created_by)
    return [
        serialize_quotation(quotation, item_count=item_count, total_amount=total_amount)
        for quotation, item_count, total_amount in rows
    ]
