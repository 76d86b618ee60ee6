"""
Unit tests for commission calculation service.

Tests:
- Rate lookup with the 50% default
- Booking filtering (status, inclusive window, professional)
- Per-professional aggregation, ordering and totals
"""

import pytest
from datetime import date
from decimal import Decimal
from barberdesk.services.commission import (
    ALL,
    BookingRecord,
    FilterConfig,
    ProfessionalRecord,
    RateRecord,
    aggregate_commissions,
    build_commission_report,
    compute_totals,
    filter_bookings,
    resolve_rate,
    to_decimal,
)

JANUARY = FilterConfig(date(2024, 1, 1), date(2024, 1, 31))

PRO_A = ProfessionalRecord(id="a", name="Ana")
PRO_B = ProfessionalRecord(id="b", name="Bruno")


def booking(id, pro, day, amount, status="completed"):
    return BookingRecord(
        id=id,
        professional_id=pro,
        booking_date=day,
        status=status,
        total_price=Decimal(str(amount)),
    )


def example_bookings():
    return [
        booking(1, "a", date(2024, 1, 5), 100),
        booking(2, "a", date(2024, 1, 10), 50),
        booking(3, "b", date(2024, 1, 7), 80),
        booking(4, "a", date(2024, 1, 8), 999, status="cancelled"),
        booking(5, "b", date(2023, 12, 31), 80),
    ]


class TestToDecimal:

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), "Infinity"])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)

    def test_numbers_and_strings(self):
        assert to_decimal(12.5) == Decimal("12.5")
        assert to_decimal("1,234.50") == Decimal("1234.50")
        assert to_decimal("  ") is None


class TestResolveRate:
    """Tests for resolve_rate."""

    def test_default_when_missing(self):
        """No rate record gives 50%."""
        assert resolve_rate("x", [RateRecord("a", Decimal("40"))]) == Decimal("50")

    def test_default_with_no_rates(self):
        assert resolve_rate("a", []) == Decimal("50")

    def test_matching_rate(self):
        assert resolve_rate("a", [RateRecord("a", Decimal("40"))]) == Decimal("40")

    def test_first_match_wins(self):
        rates = [RateRecord("a", Decimal("35")), RateRecord("a", Decimal("60"))]
        assert resolve_rate("a", rates) == Decimal("35")

    def test_zero_rate_is_kept(self):
        assert resolve_rate("a", [RateRecord("a", Decimal("0"))]) == Decimal("0")

    def test_null_rate_falls_back_to_default(self):
        assert resolve_rate("a", [RateRecord("a", None)]) == Decimal("50")

    def test_out_of_range_rate_not_validated_on_read(self):
        assert resolve_rate("a", [RateRecord("a", Decimal("150"))]) == Decimal("150")


class TestBookingRecord:
    """Tests for the typed booking record."""

    def test_total_price_preferred(self):
        b = BookingRecord(1, "a", date(2024, 1, 1), "completed",
                          price=Decimal("30"), total_price=Decimal("45"))
        assert b.amount == Decimal("45")

    def test_price_fallback(self):
        b = BookingRecord(1, "a", date(2024, 1, 1), "completed", price=Decimal("30"))
        assert b.amount == Decimal("30")

    def test_no_amount_is_zero(self):
        b = BookingRecord(1, "a", date(2024, 1, 1), "completed")
        assert b.amount == Decimal("0")

    def test_from_dict_parses_iso_strings(self):
        b = BookingRecord.from_dict({
            "id": 7,
            "professional_id": "a",
            "booking_date": "2024-01-05",
            "status": "completed",
            "price": None,
            "total_price": "35.50",
        })
        assert b.booking_date == date(2024, 1, 5)
        assert b.amount == Decimal("35.50")

    def test_from_dict_accepts_timestamp(self):
        b = BookingRecord.from_dict({
            "id": 7, "professional_id": "a", "status": "completed",
            "booking_date": "2024-01-05T14:30:00-03:00", "price": 20,
        })
        assert b.booking_date == date(2024, 1, 5)
        assert b.amount == Decimal("20")

    def test_from_dict_rejects_bad_date(self):
        with pytest.raises(ValueError):
            BookingRecord.from_dict({"id": 1, "booking_date": "05/01/2024"})

    def test_from_dict_rejects_bad_price(self):
        with pytest.raises(ValueError):
            BookingRecord.from_dict({"id": 1, "booking_date": "2024-01-05", "price": "ten"})


class TestFilterBookings:
    """Tests for filter_bookings."""

    def test_only_completed(self):
        bookings = [
            booking(1, "a", date(2024, 1, 5), 10, status="completed"),
            booking(2, "a", date(2024, 1, 5), 10, status="pending"),
            booking(3, "a", date(2024, 1, 5), 10, status="cancelled"),
        ]
        result = filter_bookings(bookings, JANUARY)
        assert [b.id for b in result] == [1]

    def test_window_is_inclusive(self):
        bookings = [
            booking(1, "a", date(2024, 1, 1), 10),
            booking(2, "a", date(2024, 1, 31), 10),
            booking(3, "a", date(2023, 12, 31), 10),
            booking(4, "a", date(2024, 2, 1), 10),
        ]
        result = filter_bookings(bookings, JANUARY)
        assert [b.id for b in result] == [1, 2]

    def test_professional_filter(self):
        filters = FilterConfig(date(2024, 1, 1), date(2024, 1, 31), professional_id="b")
        result = filter_bookings(example_bookings(), filters)
        assert [b.id for b in result] == [3]

    def test_start_after_end_rejected(self):
        with pytest.raises(ValueError):
            FilterConfig(date(2024, 2, 1), date(2024, 1, 1))


class TestAggregateCommissions:
    """Tests for aggregate_commissions and compute_totals."""

    def test_worked_example(self):
        """A at 40% and B at the default 50% over January 2024."""
        report = build_commission_report(
            example_bookings(), [PRO_A, PRO_B], [RateRecord("a", Decimal("40"))], JANUARY
        )
        a, b = report.aggregates

        assert a.professional == PRO_A
        assert a.gross_amount == Decimal("150")
        assert a.commission_rate == Decimal("40")
        assert a.commission_amount == Decimal("60")
        assert a.net_amount == Decimal("90")
        assert a.bookings_count == 2

        assert b.professional == PRO_B
        assert b.gross_amount == Decimal("80")
        assert b.commission_rate == Decimal("50")
        assert b.commission_amount == Decimal("40")
        assert b.net_amount == Decimal("40")
        assert b.bookings_count == 1

        assert report.totals.gross_amount == Decimal("230")
        assert report.totals.commission_amount == Decimal("100")
        assert report.totals.net_amount == Decimal("130")
        assert report.totals.bookings_count == 3

    def test_sorted_by_gross_descending(self):
        bookings = [
            booking(1, "a", date(2024, 1, 2), 20),
            booking(2, "b", date(2024, 1, 3), 90),
        ]
        result = aggregate_commissions(bookings, [PRO_A, PRO_B], [], JANUARY)
        assert [a.professional.id for a in result] == ["b", "a"]

    def test_ties_keep_encounter_order(self):
        pro_c = ProfessionalRecord(id="c", name="Carla")
        bookings = [
            booking(1, "b", date(2024, 1, 2), 50),
            booking(2, "c", date(2024, 1, 3), 50),
            booking(3, "a", date(2024, 1, 4), 50),
        ]
        result = aggregate_commissions(bookings, [PRO_A, PRO_B, pro_c], [], JANUARY)
        assert [a.professional.id for a in result] == ["b", "c", "a"]

    def test_unknown_professional_dropped(self):
        bookings = [
            booking(1, "a", date(2024, 1, 2), 20),
            booking(2, "ghost", date(2024, 1, 3), 500),
        ]
        report = build_commission_report(bookings, [PRO_A], [], JANUARY)
        assert [a.professional.id for a in report.aggregates] == ["a"]
        assert report.totals.gross_amount == Decimal("20")

    def test_empty_result(self):
        report = build_commission_report([], [PRO_A], [], JANUARY)
        assert report.aggregates == []
        assert report.totals.gross_amount == Decimal("0")
        assert report.totals.commission_amount == Decimal("0")
        assert report.totals.net_amount == Decimal("0")
        assert report.totals.bookings_count == 0

    def test_commission_and_net_identities(self):
        bookings = [
            booking(1, "a", date(2024, 1, 2), "33.33"),
            booking(2, "a", date(2024, 1, 3), "19.99"),
            booking(3, "b", date(2024, 1, 4), "47.10"),
        ]
        rates = [RateRecord("a", Decimal("37.5")), RateRecord("b", Decimal("12.25"))]
        aggregates = aggregate_commissions(bookings, [PRO_A, PRO_B], rates, JANUARY)
        for agg in aggregates:
            expected = agg.gross_amount * agg.commission_rate / 100
            assert abs(agg.commission_amount - expected) < Decimal("0.005")
            assert agg.net_amount == agg.gross_amount - agg.commission_amount

        totals = compute_totals(aggregates)
        assert totals.net_amount == totals.gross_amount - totals.commission_amount

    def test_idempotent(self):
        rates = [RateRecord("a", Decimal("40"))]
        first = build_commission_report(example_bookings(), [PRO_A, PRO_B], rates, JANUARY)
        second = build_commission_report(example_bookings(), [PRO_A, PRO_B], rates, JANUARY)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_professional_filter_all(self):
        filters = FilterConfig(date(2024, 1, 1), date(2024, 1, 31), professional_id=ALL)
        result = aggregate_commissions(example_bookings(), [PRO_A, PRO_B], [], filters)
        assert len(result) == 2

    def test_to_dict_shape(self):
        report = build_commission_report(
            example_bookings(), [PRO_A, PRO_B], [RateRecord("a", Decimal("40"))], JANUARY
        )
        data = report.to_dict()
        assert data["professionals"][0] == {
            "professional": {"id": "a", "name": "Ana", "photo_url": None},
            "grossAmount": 150.0,
            "commissionRate": 40.0,
            "commissionAmount": 60.0,
            "netAmount": 90.0,
            "bookingsCount": 2,
        }
        assert data["totals"] == {
            "grossAmount": 230.0,
            "commissionAmount": 100.0,
            "netAmount": 130.0,
            "bookingsCount": 3,
        }
        assert data["filters"]["date_start"] == "2024-01-01"
