"""Persistence boundary for quotations and their line items."""
from sqlalchemy import func, or_

from app.models import Quotation, QuotationItem, QuotationStatus


class QuotationRepository:
    """
    Reads and writes quotations through one SQLAlchemy session.

    Nothing here commits on its own: header and item writes stay in the
    session's transaction until the caller calls ``commit``.
    """

    def __init__(self, session):
        self.session = session

    def create(self, header, items):
        """Insert a header and its items; returns the flushed Quotation."""
        quotation = Quotation(**header)
        quotation.items = list(items)
        self.session.add(quotation)
        self.session.flush()
        return quotation

    def get(self, quotation_id):
        return self.session.query(Quotation).filter(Quotation.id == quotation_id).first()

    def get_for_update(self, quotation_id):
        """Load a quotation holding a row lock until the transaction ends."""
        return (
            self.session.query(Quotation)
            .filter(Quotation.id == quotation_id)
            .with_for_update()
            .first()
        )

    def get_items(self, quotation_id):
        return (
            self.session.query(QuotationItem)
            .filter(QuotationItem.quotation_id == quotation_id)
            .order_by(QuotationItem.id.asc())
            .all()
        )

    def replace_items(self, quotation, items):
        """Delete every existing item of ``quotation`` and insert ``items``."""
        quotation.items = list(items)  # delete-orphan removes the old rows
        self.session.flush()

    def update_header(self, quotation, fields):
        for name, value in fields.items():
            setattr(quotation, name, value)
        self.session.flush()

    def set_approved(self, quotation_id, approver, approved_at):
        """
        Mark a quotation approved unless it already is.

        Returns:
            True if a row changed, False if the quotation was already approved.
        """
        changed = (
            self.session.query(Quotation)
            .filter(
                Quotation.id == quotation_id,
                Quotation.status != QuotationStatus.APPROVED.value
            )
            .update(
                {
                    Quotation.status: QuotationStatus.APPROVED.value,
                    Quotation.approved_by: approver,
                    Quotation.approved_at: approved_at,
                },
                synchronize_session='fetch'
            )
        )
        return changed == 1

    def list(self, status=None, search=None, created_by=None):
        """
        Quotations newest first, each with its item count and item total.

        Returns:
            List of (Quotation, item_count, total_amount) tuples.
        """
        query = (
            self.session.query(
                Quotation,
                func.count(QuotationItem.id).label('item_count'),
                func.coalesce(func.sum(QuotationItem.total_price), 0).label('total_amount')
            )
            .outerjoin(QuotationItem, QuotationItem.quotation_id == Quotation.id)
            .group_by(Quotation.id)
        )

        if status:
            query = query.filter(Quotation.status == status)

        if created_by:
            query = query.filter(Quotation.created_by == created_by)

        if search:
            pattern = f'%{search}%'
            query = query.filter(
                or_(
                    Quotation.ref_no.ilike(pattern),
                    Quotation.customer_name.ilike(pattern),
                    Quotation.customer_phone.ilike(pattern),
                    Quotation.quote_for.ilike(pattern),
                    Quotation.project_title.ilike(pattern)
                )
            )

        return query.order_by(Quotation.id.desc()).all()

    def delete(self, quotation):
        self.session.delete(quotation)  # cascades to items
        self.session.flush()

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()
