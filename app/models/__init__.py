"""Models package - exports all SQLAlchemy models."""
from app.models.app_user import AppUser, UserRole
from app.models.material import Material
from app.models.quotation import Quotation, QuotationStatus
from app.models.quotation_item import QuotationItem
from app.models.quotation_settings import QuotationSettings
from app.models.audit_log import AuditLog, AuditAction

__all__ = [
    'AppUser', 'UserRole',
    'Material',
    'Quotation', 'QuotationStatus', 'QuotationItem',
    'QuotationSettings',
    'AuditLog', 'AuditAction',
]
