"""
Commission rate maintenance.

A rate update writes three things: the current rate row (one per
professional and barbershop), the legacy percentage on the professional,
and a history entry with the old and new rate.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from barberdesk.models import Professional, ProfessionalCommission, CommissionRateHistory
from barberdesk.services.validators import validate_commission_rate

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


def get_professional(db: Session, barbershop_id: int, professional_id: int) -> Optional[Professional]:
    return (
        db.query(Professional)
        .filter(
            Professional.id == professional_id,
            Professional.barbershop_id == barbershop_id,
        )
        .first()
    )


def update_commission_rate(
    db: Session,
    barbershop_id: int,
    professional_id: int,
    raw_rate: Any,
    changed_by_user_id: Optional[int] = None,
) -> ProfessionalCommission:
    """
    Validate and store a new commission rate for a professional.

    Raises:
        ValueError: rate invalid or professional not in this barbershop;
            nothing is written
    """
    result = validate_commission_rate(raw_rate)
    if not result.is_valid:
        logger.warning(
            "Rejected commission rate %r for professional %s: %s",
            raw_rate, professional_id, result.errors,
        )
    result.raise_if_invalid()
    new_rate = result.cleaned["commission_rate"]

    professional = get_professional(db, barbershop_id, professional_id)
    if not professional:
        raise ValueError("Professional not found for this barbershop")

    row = (
        db.query(ProfessionalCommission)
        .filter(
            ProfessionalCommission.barbershop_id == barbershop_id,
            ProfessionalCommission.professional_id == professional_id,
        )
        .first()
    )
    old_rate = row.commission_rate if row is not None else professional.commission_percentage

    if row is None:
        row = ProfessionalCommission(
            barbershop_id=barbershop_id,
            professional_id=professional_id,
            commission_rate=new_rate,
        )
        db.add(row)
    else:
        row.commission_rate = new_rate
        row.updated_at = datetime.utcnow()

    professional.commission_percentage = new_rate

    db.add(CommissionRateHistory(
        barbershop_id=barbershop_id,
        professional_id=professional_id,
        old_rate_percent=old_rate,
        new_rate_percent=new_rate,
        changed_by_user_id=changed_by_user_id,
    ))
    db.commit()
    db.refresh(row)

    logger.info(
        "Commission rate for professional %s changed %s -> %s",
        professional_id, old_rate, new_rate,
    )
    return row


def list_professionals_with_rates(db: Session, barbershop_id: int) -> List[dict]:
    """Active professionals by name with their effective rate (0 when unset)."""
    professionals = (
        db.query(Professional)
        .filter(
            Professional.barbershop_id == barbershop_id,
            Professional.is_active == True,  # noqa: E712
        )
        .order_by(Professional.name)
        .all()
    )
    rows = (
        db.query(ProfessionalCommission)
        .filter(ProfessionalCommission.barbershop_id == barbershop_id)
        .all()
    )
    by_professional = {r.professional_id: r for r in rows}

    result = []
    for p in professionals:
        row = by_professional.get(p.id)
        if row is not None and row.commission_rate is not None:
            rate = row.commission_rate
        elif p.commission_percentage is not None:
            rate = p.commission_percentage
        else:
            rate = Decimal("0")
        result.append({
            "id": p.id,
            "name": p.name,
            "photo_url": p.photo_url,
            "commission_rate": float(rate),
            "commission_updated_at": row.updated_at.isoformat() if row is not None else None,
        })
    return result


def list_rate_history(
    db: Session,
    barbershop_id: int,
    professional_id: Optional[int] = None,
    limit: int = HISTORY_LIMIT,
) -> List[CommissionRateHistory]:
    query = db.query(CommissionRateHistory).filter(
        CommissionRateHistory.barbershop_id == barbershop_id
    )
    if professional_id is not None:
        query = query.filter(CommissionRateHistory.professional_id == professional_id)
    return (
        query.order_by(CommissionRateHistory.changed_at.desc(), CommissionRateHistory.id.desc())
        .limit(limit)
        .all()
    )


def history_to_dict(entry: CommissionRateHistory) -> dict:
    return {
        "id": entry.id,
        "professional_id": entry.professional_id,
        "professional_name": entry.professional.name if entry.professional else None,
        "old_rate_percent": float(entry.old_rate_percent) if entry.old_rate_percent is not None else None,
        "new_rate_percent": float(entry.new_rate_percent),
        "changed_by_user_id": entry.changed_by_user_id,
        "changed_at": entry.changed_at.isoformat(),
    }
