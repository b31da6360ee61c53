"""Quotation model - header of a priced proposal issued to a customer."""
import enum
from sqlalchemy import Column, String, Numeric, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base, BigIntPK


class QuotationStatus(enum.Enum):
    """Quotation status enum."""
    DRAFT = 'Draft'
    APPROVED = 'Approved'
    SENT = 'Sent'  # reserved for list filters, never written


class Quotation(Base):
    """
    Quotation header.

    Financial fields are stored, not computed on read: every write
    recomputes them from the line items in the same transaction.
    """

    __tablename__ = 'quotation'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    ref_no = Column(String(32), nullable=False, unique=True)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=True)
    customer_address = Column(Text, nullable=True)
    quote_for = Column(String(255), nullable=False)
    project_title = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    subtotal = Column(Numeric(14, 2), nullable=False, default=0)
    discount_percent = Column(Numeric(7, 3), nullable=False, default=0)
    discount_amount = Column(Numeric(14, 2), nullable=False, default=0)
    vat_percent = Column(Numeric(7, 3), nullable=False, default=0)
    vat_amount = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)

    status = Column(String(20), nullable=False, default=QuotationStatus.DRAFT.value)
    created_by = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    approved_by = Column(String(255), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    items = relationship(
        'QuotationItem',
        back_populates='quotation',
        cascade='all, delete-orphan',
        order_by='QuotationItem.id'
    )

    def __repr__(self):
        return f"<Quotation(id={self.id}, ref_no='{self.ref_no}', status='{self.status}', total={self.total})>"

    @property
    def is_approved(self):
        return self.status == QuotationStatus.APPROVED.value
