"""
Audit Log model for tracking quotation, catalog and settings changes.
"""
from sqlalchemy import Column, BigInteger, String, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import enum

from app.database import Base, BigIntPK


class AuditAction(enum.Enum):
    """Enumeration of auditable actions."""
    # Quotations
    QUOTATION_CREATED = "QUOTATION_CREATED"
    QUOTATION_UPDATED = "QUOTATION_UPDATED"
    QUOTATION_APPROVED = "QUOTATION_APPROVED"
    QUOTATION_DELETED = "QUOTATION_DELETED"

    # Material catalog
    MATERIAL_CREATED = "MATERIAL_CREATED"
    MATERIAL_UPDATED = "MATERIAL_UPDATED"
    MATERIAL_DELETED = "MATERIAL_DELETED"

    # Settings
    SETTINGS_CHANGED = "SETTINGS_CHANGED"


def _utcnow():
    return datetime.now(timezone.utc)


class AuditLog(Base):
    """Audit log for tracking user actions."""
    __tablename__ = 'audit_log'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, ForeignKey('app_user.id'), nullable=False, index=True)
    action = Column(SQLEnum(AuditAction), nullable=False, index=True)
    resource_type = Column(String(50))  # e.g., 'quotation', 'material'
    resource_id = Column(BigInteger)
    details = Column(Text)  # JSON with additional details
    ip_address = Column(String(45))  # IPv4 or IPv6
    user_agent = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)

    # Relationships
    user = relationship('AppUser')

    def __repr__(self):
        return f"<AuditLog {self.action.value} by user {self.user_id} at {self.created_at}>"
