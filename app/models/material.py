"""Material model - the centrally priced catalog used by quotations."""
from sqlalchemy import Column, String, Numeric, DateTime
from sqlalchemy.sql import func
from app.database import Base, BigIntPK


class Material(Base):
    """Catalog material (name, category, unit, unit price)."""

    __tablename__ = 'material'

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)
    unit = Column(String(32), nullable=True)
    unit_price = Column(Numeric(14, 2), nullable=False, default=0)
    last_updated = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Material(id={self.id}, name='{self.name}', unit_price={self.unit_price})>"
