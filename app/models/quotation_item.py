"""QuotationItem model for quotation line items."""
from sqlalchemy import Column, BigInteger, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base, BigIntPK


class QuotationItem(Base):
    """
    Quotation line item.

    Stores a snapshot of the catalog material at the time the item was
    added so later catalog edits do not change historical quotations.
    """

    __tablename__ = 'quotation_item'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    quotation_id = Column(BigInteger, ForeignKey('quotation.id', ondelete='CASCADE'), nullable=False, index=True)
    material_id = Column(BigInteger, ForeignKey('material.id', ondelete='SET NULL'), nullable=True)
    material_name = Column(String(200), nullable=False)
    material_category = Column(String(100), nullable=True)
    material_unit = Column(String(32), nullable=True)
    material_unit_price = Column(Numeric(14, 2), nullable=False, default=0)
    quantity = Column(Numeric(12, 3), nullable=False)
    unit_price = Column(Numeric(14, 2), nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    quotation = relationship('Quotation', back_populates='items')

    def __repr__(self):
        return f"<QuotationItem(id={self.id}, quotation_id={self.quotation_id}, name='{self.material_name}', qty={self.quantity}, total={self.total_price})>"
