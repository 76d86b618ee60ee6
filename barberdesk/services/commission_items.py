"""
Commission Items Service

Per-sale commission lines with their own PENDING/PAID status. This is a
parallel structure to the payout ledger; neither is reconciled against the
other.

Handles:
- Filtered, paginated listing
- KPI totals (gross, commission, paid, pending)
- Chart series (per day, per professional, per status)
- Bulk mark-as-paid with a payment log entry
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session, selectinload

from barberdesk.models import CommissionItem, CommissionPaymentLog
from barberdesk.services.commission import ALL, ZERO, money
from barberdesk.services.periods import PERIOD_PRESETS, preset_range
from barberdesk.template_config import to_local

logger = logging.getLogger(__name__)

PENDING = "PENDING"
PAID = "PAID"
TOP_PROFESSIONALS = 10
UNKNOWN_PROFESSIONAL = "Unknown"


@dataclass(frozen=True)
class CommissionItemFilters:
    period_preset: str = "month"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    professional_id: Union[int, str] = ALL
    payment_status: str = ALL

    def __post_init__(self):
        if self.period_preset not in PERIOD_PRESETS:
            raise ValueError(f"Unknown period preset '{self.period_preset}'")
        if self.payment_status not in (ALL, PENDING, PAID):
            raise ValueError(f"Invalid payment status '{self.payment_status}'")

    def window(self, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        return preset_range(self.period_preset, now, self.start_date, self.end_date)


def _filtered_query(db: Session, barbershop_id: int, filters: CommissionItemFilters, now=None):
    start, end = filters.window(now)
    query = db.query(CommissionItem).filter(
        CommissionItem.barbershop_id == barbershop_id,
        CommissionItem.occurred_at >= start,
        CommissionItem.occurred_at <= end,
    )
    if filters.professional_id != ALL:
        query = query.filter(CommissionItem.professional_id == filters.professional_id)
    if filters.payment_status != ALL:
        query = query.filter(CommissionItem.payment_status == filters.payment_status)
    return query


def list_commission_items(
    db: Session,
    barbershop_id: int,
    filters: CommissionItemFilters,
    page: int = 1,
    page_size: int = 10,
    now: Optional[datetime] = None,
) -> Tuple[List[CommissionItem], int]:
    """Return one page of items (newest first) and the total matching count."""
    page = max(page, 1)
    query = _filtered_query(db, barbershop_id, filters, now)
    count = query.count()
    items = (
        query.options(selectinload(CommissionItem.professional))
        .order_by(CommissionItem.occurred_at.desc(), CommissionItem.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, count


def load_commission_items(
    db: Session,
    barbershop_id: int,
    filters: CommissionItemFilters,
    now: Optional[datetime] = None,
) -> List[CommissionItem]:
    """All items matching the filters, for KPI and chart computation."""
    return (
        _filtered_query(db, barbershop_id, filters, now)
        .options(selectinload(CommissionItem.professional))
        .all()
    )


def _amount(value) -> Decimal:
    return Decimal(str(value or 0))


def commission_kpis(items: Iterable[CommissionItem]) -> dict:
    total_gross = ZERO
    total_commission = ZERO
    total_paid = ZERO
    total_pending = ZERO

    for item in items:
        commission = _amount(item.commission_amount)
        total_gross += _amount(item.gross_amount)
        total_commission += commission
        if item.payment_status == PAID:
            total_paid += commission
        elif item.payment_status == PENDING:
            total_pending += commission

    return {
        "total_gross": money(total_gross),
        "total_commission": money(total_commission),
        "total_paid": money(total_paid),
        "total_pending": money(total_pending),
    }


def commission_chart_data(items: Iterable[CommissionItem]) -> dict:
    """
    Build chart series from commission items.

    Returns:
        Dictionary with:
        - time_series: [{date, value}] commission per local day, oldest first
        - by_professional: [{name, value}] top 10 by commission
        - by_status: [{name, value}] paid and pending commission
    """
    per_day = {}
    per_professional = {}
    paid = ZERO
    pending = ZERO

    for item in items:
        commission = _amount(item.commission_amount)

        day = to_local(item.occurred_at).date().isoformat()
        per_day[day] = per_day.get(day, ZERO) + commission

        name = item.professional.name if item.professional else UNKNOWN_PROFESSIONAL
        per_professional[name] = per_professional.get(name, ZERO) + commission

        if item.payment_status == PAID:
            paid += commission
        elif item.payment_status == PENDING:
            pending += commission

    time_series = [
        {"date": day, "value": money(value)} for day, value in sorted(per_day.items())
    ]
    by_professional = sorted(
        ({"name": name, "value": money(value)} for name, value in per_professional.items()),
        key=lambda row: row["value"],
        reverse=True,
    )[:TOP_PROFESSIONALS]
    by_status = [
        {"name": "Paid", "value": money(paid)},
        {"name": "Pending", "value": money(pending)},
    ]

    return {
        "time_series": time_series,
        "by_professional": by_professional,
        "by_status": by_status,
    }


def mark_commission_items_paid(
    db: Session,
    barbershop_id: int,
    item_ids: List[int],
    paid_by_user_id: Optional[int] = None,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> CommissionPaymentLog:
    """
    Mark the barbershop's items as PAID and record one payment log entry.

    Items belonging to another barbershop are left untouched. Raises
    ValueError when none of the ids match, without writing a log entry.
    """
    if not item_ids:
        raise ValueError("Select at least one commission item")

    paid_at = now or datetime.utcnow()
    items = (
        db.query(CommissionItem)
        .filter(
            CommissionItem.id.in_(item_ids),
            CommissionItem.barbershop_id == barbershop_id,
        )
        .all()
    )
    if not items:
        raise ValueError("No matching commission items")

    for item in items:
        item.payment_status = PAID
        item.paid_at = paid_at
        item.updated_at = paid_at

    professional_ids = {item.professional_id for item in items}
    log = CommissionPaymentLog(
        barbershop_id=barbershop_id,
        professional_id=professional_ids.pop() if len(professional_ids) == 1 else None,
        commission_item_ids=[item.id for item in items],
        paid_by_user_id=paid_by_user_id,
        note=note.strip() if note and note.strip() else None,
        paid_at=paid_at,
    )
    db.add(log)
    db.commit()
    db.refresh(log)

    logger.info(
        "Marked %d commission items paid for barbershop %s (log %s)",
        len(items), barbershop_id, log.id,
    )
    return log


def item_to_dict(item: CommissionItem) -> dict:
    return {
        "id": item.id,
        "professional_id": item.professional_id,
        "professional": {
            "id": item.professional.id,
            "name": item.professional.name,
            "photo_url": item.professional.photo_url,
        } if item.professional else None,
        "booking_id": item.booking_id,
        "source_type": item.source_type,
        "occurred_at": item.occurred_at.isoformat(),
        "gross_amount": float(item.gross_amount),
        "applied_commission_rate": float(item.applied_commission_rate),
        "commission_amount": float(item.commission_amount),
        "payment_status": item.payment_status,
        "paid_at": item.paid_at.isoformat() if item.paid_at else None,
    }
