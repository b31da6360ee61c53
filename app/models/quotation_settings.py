"""QuotationSettings model - company details printed on quotations."""
from sqlalchemy import Column, String, Numeric, Text
from app.database import Base, BigIntPK


class QuotationSettings(Base):
    """Single-row table holding company info and quotation defaults."""

    __tablename__ = 'quotation_settings'

    EDITABLE_FIELDS = (
        'company_name', 'company_address', 'company_phone', 'company_email',
        'default_vat', 'default_discount', 'footer_note',
        'bank_name', 'bank_account_name', 'bank_account_number',
        'terms', 'payment_terms', 'company_website', 'company_rc',
        'watermark_text', 'signature_footer_text',
    )

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    company_name = Column(String(200), nullable=True)
    company_address = Column(Text, nullable=True)
    company_phone = Column(String(50), nullable=True)
    company_email = Column(String(255), nullable=True)
    company_website = Column(String(255), nullable=True)
    company_rc = Column(String(50), nullable=True)
    default_vat = Column(Numeric(7, 3), nullable=False, default=0)
    default_discount = Column(Numeric(7, 3), nullable=False, default=0)
    footer_note = Column(Text, nullable=True)
    bank_name = Column(String(200), nullable=True)
    bank_account_name = Column(String(200), nullable=True)
    bank_account_number = Column(String(50), nullable=True)
    terms = Column(Text, nullable=True)
    payment_terms = Column(Text, nullable=True)
    watermark_text = Column(String(100), nullable=True)
    signature_footer_text = Column(Text, nullable=True)

    def __repr__(self):
        return f"<QuotationSettings(id={self.id}, company='{self.company_name}')>"
