"""
Payout Ledger Service

Payouts are entered by an admin (gross amount and rate typed in) and are
never derived from, or reconciled against, the live commission aggregates.
The commission amount is computed once at creation and stored.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from barberdesk.models import CommissionPayment
from barberdesk.services.commission import ALL, HUNDRED, ZERO, money
from barberdesk.services.validators import validate_payout

logger = logging.getLogger(__name__)

PENDING = "pending"
PAID = "paid"


def calculate_payout_commission(gross_amount: Decimal, commission_rate: Decimal) -> Decimal:
    """commission_amount = gross * rate / 100, rounded to cents."""
    return money(gross_amount * commission_rate / HUNDRED)


def create_payout(db: Session, barbershop_id: int, data: Dict[str, Any]) -> CommissionPayment:
    """
    Create a pending payout ledger entry.

    Args:
        db: Database session
        barbershop_id: Tenant the payout belongs to
        data: professional_id, gross_amount, period_start, period_end,
            commission_rate (optional, defaults to 50), notes (optional)

    Returns:
        The persisted CommissionPayment

    Raises:
        ValueError: if any field is invalid; nothing is written
    """
    result = validate_payout(data, db, barbershop_id)
    if not result.is_valid:
        logger.warning("Rejected payout for barbershop %s: %s", barbershop_id, result.errors)
    result.raise_if_invalid()

    cleaned = result.cleaned
    gross = money(cleaned["gross_amount"])
    rate = cleaned["commission_rate"]

    payout = CommissionPayment(
        barbershop_id=barbershop_id,
        professional_id=cleaned["professional_id"],
        period_start=cleaned["period_start"],
        period_end=cleaned["period_end"],
        gross_amount=gross,
        commission_rate=rate,
        commission_amount=calculate_payout_commission(gross, rate),
        status=PENDING,
        notes=cleaned["notes"],
    )
    db.add(payout)
    db.commit()
    db.refresh(payout)

    logger.info(
        "Created payout %s for professional %s: gross=%s rate=%s commission=%s",
        payout.id, payout.professional_id, payout.gross_amount,
        payout.commission_rate, payout.commission_amount,
    )
    return payout


def get_payout(db: Session, barbershop_id: int, payout_id: int) -> Optional[CommissionPayment]:
    return (
        db.query(CommissionPayment)
        .filter(
            CommissionPayment.id == payout_id,
            CommissionPayment.barbershop_id == barbershop_id,
        )
        .first()
    )


def set_payout_status(
    db: Session,
    payout: CommissionPayment,
    status: str,
    now: Optional[datetime] = None,
) -> CommissionPayment:
    """
    Move a payout to "paid" (stamping paid_at) or back to "pending"
    (clearing it). No version check: the last write wins.
    """
    if status == PAID:
        payout.mark_paid(now or datetime.utcnow())
    elif status == PENDING:
        payout.mark_pending()
    else:
        raise ValueError(f"Invalid payout status '{status}'")

    db.commit()
    db.refresh(payout)
    logger.info("Payout %s marked %s", payout.id, payout.status)
    return payout


def toggle_payout_status(
    db: Session, payout: CommissionPayment, now: Optional[datetime] = None
) -> CommissionPayment:
    new_status = PENDING if payout.status == PAID else PAID
    return set_payout_status(db, payout, new_status, now=now)


def list_payouts(
    db: Session,
    barbershop_id: int,
    professional_id: Union[int, str] = ALL,
    status: str = ALL,
    period_start: Optional[date] = None,
    period_end: Optional[date] = None,
) -> List[CommissionPayment]:
    """List a barbershop's payouts, newest first.

    Optional period bounds keep payouts with period_start >= period_start and
    period_end <= period_end.
    """
    query = db.query(CommissionPayment).filter(
        CommissionPayment.barbershop_id == barbershop_id
    )
    if professional_id != ALL:
        query = query.filter(CommissionPayment.professional_id == professional_id)
    if status != ALL:
        query = query.filter(CommissionPayment.status == status)
    if period_start is not None:
        query = query.filter(CommissionPayment.period_start >= period_start)
    if period_end is not None:
        query = query.filter(CommissionPayment.period_end <= period_end)

    return query.order_by(
        CommissionPayment.created_at.desc(), CommissionPayment.id.desc()
    ).all()


def summarize_payouts(payouts: Iterable[CommissionPayment]) -> Dict[str, Decimal]:
    """Sum commission_amount of pending and paid payouts."""
    pending = ZERO
    paid = ZERO
    for payout in payouts:
        amount = Decimal(str(payout.commission_amount or 0))
        if payout.status == PAID:
            paid += amount
        elif payout.status == PENDING:
            pending += amount
    return {"pending": money(pending), "paid": money(paid)}


def payout_to_dict(payout: CommissionPayment) -> dict:
    return {
        "id": payout.id,
        "barbershop_id": payout.barbershop_id,
        "professional_id": payout.professional_id,
        "professional_name": payout.professional.name if payout.professional else None,
        "period_start": payout.period_start.isoformat(),
        "period_end": payout.period_end.isoformat(),
        "gross_amount": float(payout.gross_amount),
        "commission_rate": float(payout.commission_rate),
        "commission_amount": float(payout.commission_amount),
        "status": payout.status,
        "paid_at": payout.paid_at.isoformat() if payout.paid_at else None,
        "notes": payout.notes,
    }
