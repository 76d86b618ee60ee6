"""
Commission Calculation Service

Handles:
- Commission rate lookup (default 50% when a professional has no rate)
- Filtering completed bookings by date window and professional
- Per-professional gross / commission / net aggregation
- Totals row across all professionals

Everything above the `load_commission_report` loader is pure: it works on
typed records, never on ORM rows, and returns new values on every call.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

ALL = "all"
COMPLETED = "completed"
DEFAULT_COMMISSION_RATE = Decimal("50")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a number, numeric string or None into a Decimal.

    Raises ValueError for anything that is not a number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "")
        if text == "":
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return result


def to_date(value: Any) -> date:
    """Parse an ISO date (or ISO timestamp) into a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}")
    raise ValueError(f"Invalid date: {value!r}")


def money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents."""
    return (value or ZERO).quantize(CENT, rounding=ROUND_HALF_UP)


# ============================================================
# RECORDS
# ============================================================

@dataclass(frozen=True)
class BookingRecord:
    id: Any
    professional_id: Any
    booking_date: date
    status: Optional[str]
    price: Optional[Decimal] = None
    total_price: Optional[Decimal] = None

    @property
    def amount(self) -> Decimal:
        """Billed amount: total_price if present, else price, else 0."""
        if self.total_price is not None:
            return self.total_price
        if self.price is not None:
            return self.price
        return ZERO

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BookingRecord":
        return cls(
            id=data.get("id"),
            professional_id=data.get("professional_id"),
            booking_date=to_date(data.get("booking_date")),
            status=data.get("status"),
            price=to_decimal(data.get("price")),
            total_price=to_decimal(data.get("total_price")),
        )

    @classmethod
    def from_row(cls, row) -> "BookingRecord":
        return cls(
            id=row.id,
            professional_id=row.professional_id,
            booking_date=to_date(row.booking_date),
            status=row.status,
            price=to_decimal(row.price),
            total_price=to_decimal(row.total_price),
        )


@dataclass(frozen=True)
class ProfessionalRecord:
    id: Any
    name: str
    photo_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfessionalRecord":
        return cls(id=data["id"], name=data["name"], photo_url=data.get("photo_url"))

    @classmethod
    def from_row(cls, row) -> "ProfessionalRecord":
        return cls(id=row.id, name=row.name, photo_url=row.photo_url)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "photo_url": self.photo_url}


@dataclass(frozen=True)
class RateRecord:
    professional_id: Any
    commission_rate: Optional[Decimal]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateRecord":
        return cls(
            professional_id=data.get("professional_id"),
            commission_rate=to_decimal(data.get("commission_rate")),
        )

    @classmethod
    def from_row(cls, row) -> "RateRecord":
        return cls(
            professional_id=row.professional_id,
            commission_rate=to_decimal(row.commission_rate),
        )


@dataclass(frozen=True)
class FilterConfig:
    """Dashboard filter state: inclusive date window plus professional selector.

    An inverted window (start after end) raises ValueError instead of
    producing an empty report.
    """

    date_start: date
    date_end: date
    professional_id: Union[int, str] = ALL

    def __post_init__(self):
        if self.date_start > self.date_end:
            raise ValueError("Start date must be on or before end date")

    def matches_professional(self, professional_id) -> bool:
        return self.professional_id == ALL or professional_id == self.professional_id

    def to_dict(self) -> dict:
        return {
            "date_start": self.date_start.isoformat(),
            "date_end": self.date_end.isoformat(),
            "professional_id": self.professional_id,
        }


@dataclass
class CommissionAggregate:
    professional: ProfessionalRecord
    gross_amount: Decimal = ZERO
    commission_rate: Decimal = DEFAULT_COMMISSION_RATE
    commission_amount: Decimal = ZERO
    net_amount: Decimal = ZERO
    bookings_count: int = 0

    def to_dict(self) -> dict:
        return {
            "professional": self.professional.to_dict(),
            "grossAmount": float(money(self.gross_amount)),
            "commissionRate": float(self.commission_rate),
            "commissionAmount": float(money(self.commission_amount)),
            "netAmount": float(money(self.net_amount)),
            "bookingsCount": self.bookings_count,
        }


@dataclass
class CommissionTotals:
    gross_amount: Decimal = ZERO
    commission_amount: Decimal = ZERO
    net_amount: Decimal = ZERO
    bookings_count: int = 0

    def to_dict(self) -> dict:
        return {
            "grossAmount": float(money(self.gross_amount)),
            "commissionAmount": float(money(self.commission_amount)),
            "netAmount": float(money(self.net_amount)),
            "bookingsCount": self.bookings_count,
        }


@dataclass
class CommissionReport:
    filters: FilterConfig
    aggregates: List[CommissionAggregate] = field(default_factory=list)
    totals: CommissionTotals = field(default_factory=CommissionTotals)

    def to_dict(self) -> dict:
        return {
            "filters": self.filters.to_dict(),
            "professionals": [a.to_dict() for a in self.aggregates],
            "totals": self.totals.to_dict(),
        }


# ============================================================
# CALCULATION
# ============================================================

def resolve_rate(professional_id, rates: Iterable[RateRecord]) -> Decimal:
    """
    Return the commission percentage for a professional.

    The first rate record matching the professional wins. No match, or a
    match without a rate, gives DEFAULT_COMMISSION_RATE. Stored values are
    not range-checked here; that happens on the write path.
    """
    for rate in rates:
        if rate.professional_id == professional_id:
            if rate.commission_rate is None:
                return DEFAULT_COMMISSION_RATE
            return rate.commission_rate
    return DEFAULT_COMMISSION_RATE


def filter_bookings(
    bookings: Iterable[BookingRecord], filters: FilterConfig
) -> List[BookingRecord]:
    """Completed bookings inside the (inclusive) window for the selected professional."""
    return [
        b for b in bookings
        if b.status == COMPLETED
        and filters.date_start <= b.booking_date <= filters.date_end
        and filters.matches_professional(b.professional_id)
    ]


def aggregate_commissions(
    bookings: Iterable[BookingRecord],
    professionals: Sequence[ProfessionalRecord],
    rates: Sequence[RateRecord],
    filters: FilterConfig,
) -> List[CommissionAggregate]:
    """
    Group completed bookings by professional and total them.

    Bookings whose professional is not in `professionals` are dropped. The
    rate is resolved once per professional, so the current rate applies to
    the whole window.

    Returns:
        Aggregates sorted by gross amount, highest first (ties keep
        encounter order)
    """
    by_id = {p.id: p for p in professionals}
    grouped: Dict[Any, CommissionAggregate] = {}

    for booking in filter_bookings(bookings, filters):
        professional = by_id.get(booking.professional_id)
        if professional is None:
            continue

        entry = grouped.get(booking.professional_id)
        if entry is None:
            entry = CommissionAggregate(
                professional=professional,
                commission_rate=resolve_rate(booking.professional_id, rates),
            )
            grouped[booking.professional_id] = entry

        amount = booking.amount
        commission = amount * entry.commission_rate / HUNDRED

        entry.gross_amount += amount
        entry.commission_amount += commission
        entry.net_amount += amount - commission
        entry.bookings_count += 1

    return sorted(grouped.values(), key=lambda a: a.gross_amount, reverse=True)


def compute_totals(aggregates: Iterable[CommissionAggregate]) -> CommissionTotals:
    totals = CommissionTotals()
    for agg in aggregates:
        totals.gross_amount += agg.gross_amount
        totals.commission_amount += agg.commission_amount
        totals.net_amount += agg.net_amount
        totals.bookings_count += agg.bookings_count
    return totals


def build_commission_report(
    bookings: Iterable[BookingRecord],
    professionals: Sequence[ProfessionalRecord],
    rates: Sequence[RateRecord],
    filters: FilterConfig,
) -> CommissionReport:
    aggregates = aggregate_commissions(bookings, professionals, rates, filters)
    return CommissionReport(
        filters=filters, aggregates=aggregates, totals=compute_totals(aggregates)
    )


# ============================================================
# DATA ACCESS
# ============================================================

def load_commission_report(
    db: Session, barbershop_id: int, filters: FilterConfig
) -> CommissionReport:
    """
    Fetch a barbershop's bookings, professionals and current rates and
    aggregate them for the given filters.
    """
    from barberdesk.models import Booking, Professional, ProfessionalCommission

    booking_rows = (
        db.query(Booking)
        .filter(
            Booking.barbershop_id == barbershop_id,
            Booking.status == COMPLETED,
            Booking.booking_date >= filters.date_start,
            Booking.booking_date <= filters.date_end,
        )
        .order_by(Booking.booking_date, Booking.id)
        .all()
    )
    professional_rows = (
        db.query(Professional)
        .filter(Professional.barbershop_id == barbershop_id)
        .order_by(Professional.name)
        .all()
    )
    rate_rows = (
        db.query(ProfessionalCommission)
        .filter(ProfessionalCommission.barbershop_id == barbershop_id)
        .all()
    )

    logger.debug(
        "Aggregating %d bookings for barbershop %s (%s..%s)",
        len(booking_rows), barbershop_id, filters.date_start, filters.date_end,
    )

    return build_commission_report(
        [BookingRecord.from_row(r) for r in booking_rows],
        [ProfessionalRecord.from_row(r) for r in professional_rows],
        [RateRecord.from_row(r) for r in rate_rows],
        filters,
    )
