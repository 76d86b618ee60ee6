"""
Tests for commission rate maintenance.
"""

import pytest
from decimal import Decimal
from barberdesk.models import CommissionRateHistory, Professional, ProfessionalCommission
from barberdesk.services.rates import (
    list_professionals_with_rates,
    list_rate_history,
    update_commission_rate,
)


class TestUpdateCommissionRate:

    def test_updates_existing_rate(self, db, shop, ana):
        row = update_commission_rate(db, shop.id, ana.id, "45.5", changed_by_user_id=9)
        assert row.commission_rate == Decimal("45.5")
        assert db.query(ProfessionalCommission).count() == 1

        db.refresh(ana)
        assert ana.commission_percentage == Decimal("45.5")

        entry = db.query(CommissionRateHistory).one()
        assert entry.old_rate_percent == Decimal("40")
        assert entry.new_rate_percent == Decimal("45.5")
        assert entry.changed_by_user_id == 9

    def test_creates_rate_when_missing(self, db, shop, bruno):
        row = update_commission_rate(db, shop.id, bruno.id, 30)
        assert row.commission_rate == Decimal("30")

        entry = db.query(CommissionRateHistory).one()
        assert entry.old_rate_percent is None

    @pytest.mark.parametrize("value", ["abc", "-3", "101", "10.123"])
    def test_invalid_rate_writes_nothing(self, db, shop, ana, value):
        with pytest.raises(ValueError):
            update_commission_rate(db, shop.id, ana.id, value)
        assert db.query(CommissionRateHistory).count() == 0
        assert db.query(ProfessionalCommission).one().commission_rate == Decimal("40")

    def test_professional_from_other_shop(self, db, shop, other_shop, ana):
        with pytest.raises(ValueError, match="Professional not found"):
            update_commission_rate(db, other_shop.id, ana.id, "20")


class TestListProfessionalsWithRates:

    def test_effective_rates(self, db, shop, ana, bruno):
        legacy = Professional(barbershop_id=shop.id, name="Caio", commission_percentage=Decimal("35"))
        retired = Professional(barbershop_id=shop.id, name="Dora", is_active=False)
        db.add_all([legacy, retired])
        db.commit()

        rows = list_professionals_with_rates(db, shop.id)
        assert [r["name"] for r in rows] == ["Ana Souza", "Bruno Lima", "Caio"]
        assert [r["commission_rate"] for r in rows] == [40.0, 0.0, 35.0]
        assert rows[0]["commission_updated_at"] is not None
        assert rows[1]["commission_updated_at"] is None


class TestListRateHistory:

    def test_newest_first_and_filtered(self, db, shop, ana, bruno):
        update_commission_rate(db, shop.id, ana.id, "41")
        update_commission_rate(db, shop.id, bruno.id, "55")
        update_commission_rate(db, shop.id, ana.id, "42")

        history = list_rate_history(db, shop.id)
        assert [h.new_rate_percent for h in history] == [Decimal("42"), Decimal("55"), Decimal("41")]

        ana_history = list_rate_history(db, shop.id, professional_id=ana.id)
        assert [h.old_rate_percent for h in ana_history] == [Decimal("41"), Decimal("40")]

    def test_limit(self, db, shop, ana):
        for rate in ("10", "20", "30"):
            update_commission_rate(db, shop.id, ana.id, rate)
        assert len(list_rate_history(db, shop.id, limit=2)) == 2
