"""Quotation settings: company details and pricing defaults."""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from sqlalchemy.exc import SQLAlchemyError

from app.exceptions import StorageError, ValidationError
from app.models import QuotationSettings, AuditAction
from app.services.audit_service import log_action
from app.utils.formatters import to_number
from app.utils.number_format import parse_decimal

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    'company_name': 'SFV TECHNOLOGY',
    'company_address': 'Sample Address, Ilorin, Kwara State, Nigeria',
    'company_phone': '+234-800-000-0000',
    'company_email': 'sfvtech@gmail.com',
    'default_vat': 0,
    'default_discount': 0,
    'footer_note': 'Thank you for choosing SFV Technology.',
    'bank_name': 'Sample Bank',
    'bank_account_name': 'SFV TECHNOLOGY LTD',
    'bank_account_number': '0000000000',
    'terms': 'Goods sold in good condition are not returnable.',
    'payment_terms': '70% upfront, 30% on completion.',
    'company_website': 'www.sfvtech.com',
    'company_rc': 'RC 0000000',
    'watermark_text': 'SFV TECH',
    'signature_footer_text': 'This document is system-generated and requires no signature.',
}

PERCENT_FIELDS = ('default_vat', 'default_discount')


def company_defaults_from_config(config):
    """Company details from app config used when seeding the settings row."""
    return {
        'company_name': config.get('COMPANY_NAME'),
        'company_address': config.get('COMPANY_ADDRESS'),
        'company_phone': config.get('COMPANY_PHONE'),
        'company_email': config.get('COMPANY_EMAIL'),
    }


def get_settings(session, company_defaults=None):
    """
    Return the settings row, creating it with defaults on first use.

    ``company_defaults`` (from app config) overrides the built-in company
    details for the seeded row only.
    """
    settings = session.query(QuotationSettings).order_by(QuotationSettings.id.asc()).first()
    if settings:
        return settings

    values = dict(DEFAULT_SETTINGS)
    values.update({k: v for k, v in (company_defaults or {}).items() if v})
    try:
        settings = QuotationSettings(**values)
        session.add(settings)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to seed quotation settings: {e}")
        raise StorageError('Server error retrieving settings.') from e

    logger.info("Seeded default quotation settings")
    return settings


def pricing_defaults(settings):
    """Defaults handed to the quotation service for omitted percentages."""
    return {
        'discount_percent': settings.default_discount,
        'vat_percent': settings.default_vat,
    }


def update_settings(session, actor, data, company_defaults=None):
    """Apply known fields from ``data``; unknown keys are ignored."""
    updates = {}
    for name in QuotationSettings.EDITABLE_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if name in PERCENT_FIELDS:
            try:
                value = parse_decimal(value, name, default=0).quantize(Decimal('0.001'), rounding=ROUND_HALF_UP)
            except InvalidOperation:
                raise ValidationError(f'{name} is out of range')
        elif isinstance(value, str):
            value = value.strip() or None
        updates[name] = value

    settings = get_settings(session, company_defaults)
    for name, value in updates.items():
        setattr(settings, name, value)
    changed = sorted(updates)

    try:
        log_action(session, actor, AuditAction.SETTINGS_CHANGED, 'quotation_settings', settings.id, {
            'fields': changed
        })
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Failed to update quotation settings: {e}")
        raise StorageError('Server error updating settings.') from e

    return settings


def serialize_settings(settings):
    data = {'id': settings.id}
    for name in QuotationSettings.EDITABLE_FIELDS:
        value = getattr(settings, name)
        data[name] = to_number(value) if name in PERCENT_FIELDS else value
    return data
