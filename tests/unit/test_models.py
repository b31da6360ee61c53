"""
Unit tests for SQLAlchemy models.
"""

import pytest
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from app.models import (
    AppUser, UserRole, Material, Quotation, QuotationItem, QuotationStatus, QuotationSettings
)


class TestAppUserModel:
    """Tests for AppUser model."""

    def test_create_user(self, session):
        user = AppUser(email='tunde@sfvtech.test', full_name='Tunde', role='engineer')
        session.add(user)
        session.commit()

        assert user.id is not None
        assert user.active is True
        assert user.user_role is UserRole.ENGINEER
        assert not user.is_admin()

    def test_email_unique(self, session, engineer):
        session.add(AppUser(email=engineer.email, role='staff'))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_role_parse(self):
        assert UserRole.parse('ADMIN') is UserRole.ADMIN
        assert UserRole.parse(' storekeeper ') is UserRole.STOREKEEPER
        assert UserRole.parse('superuser') is None
        assert UserRole.parse(None) is None


class TestQuotationModel:
    """Tests for Quotation and QuotationItem models."""

    def _quotation(self, **overrides):
        fields = dict(
            ref_no='SFV-260101-ABCDE',
            customer_name='Acme',
            quote_for='Solar install',
            created_by='engineer@sfvtech.test',
        )
        fields.update(overrides)
        return Quotation(**fields)

    def test_defaults(self, session):
        quotation = self._quotation()
        session.add(quotation)
        session.commit()

        assert quotation.status == QuotationStatus.DRAFT.value
        assert quotation.total == 0
        assert not quotation.is_approved

    def test_ref_no_unique(self, session):
        session.add(self._quotation())
        session.commit()
        session.add(self._quotation(customer_name='Other'))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_items_are_deleted_with_quotation(self, session):
        quotation = self._quotation()
        quotation.items = [
            QuotationItem(
                material_name='Inverter', quantity=Decimal('1'),
                unit_price=Decimal('250000'), total_price=Decimal('250000')
            )
        ]
        session.add(quotation)
        session.commit()
        assert session.query(QuotationItem).count() == 1

        session.delete(quotation)
        session.commit()
        assert session.query(QuotationItem).count() == 0


class TestMaterialAndSettings:

    def test_material_price_is_decimal(self, session, panel):
        loaded = session.query(Material).filter_by(id=panel.id).one()
        assert loaded.unit_price == Decimal('50000.00')

    def test_settings_editable_fields_exist(self):
        for name in QuotationSettings.EDITABLE_FIELDS:
            assert hasattr(QuotationSettings, name)
