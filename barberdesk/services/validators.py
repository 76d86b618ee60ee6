"""
Input Validators

Centralized validation for commission rates and payout entries.
Validation functions collect human-readable messages into a ValidationResult;
`raise_if_invalid()` turns them into a ValueError.
"""

import re
from decimal import Decimal
from typing import Optional, Dict, Any, List
from sqlalchemy.orm import Session

from barberdesk.models import Professional
from barberdesk.services.commission import to_date, to_decimal

RATE_PATTERN = re.compile(r"^\d+(\.\d{0,2})?$")
# Numeric(12, 2) holds at most 10 integer digits
MAX_AMOUNT = Decimal(10) ** 10


class ValidationResult:
    """Container for validation results including the parsed values."""
    def __init__(self):
        self.errors: List[str] = []
        self.cleaned: Dict[str, Any] = {}

    def add_error(self, msg: str):
        self.errors.append(msg)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        """Raise ValueError if there are blocking errors."""
        if self.errors:
            raise ValueError("; ".join(self.errors))


def _is_empty(value: Any) -> bool:
    """Check if value is None or empty string."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def _parse_percent(value: Any, result: ValidationResult, label: str) -> Optional[Decimal]:
    try:
        rate = to_decimal(value)
    except ValueError:
        rate = None
    if rate is None:
        result.add_error(f"{label} must be a valid number")
        return None
    if rate < 0 or rate > 100:
        result.add_error(f"{label} must be between 0 and 100")
        return None
    return rate


# ============================================================
# COMMISSION RATE VALIDATION
# ============================================================

def validate_commission_rate(value: Any) -> ValidationResult:
    """
    Validate a commission rate entered by an admin.

    Rules: must be a number, between 0 and 100, at most 2 decimal places.
    The parsed rate is available as result.cleaned["commission_rate"].
    """
    result = ValidationResult()

    if _is_empty(value):
        result.add_error("Commission rate is required")
        return result

    rate = _parse_percent(value, result, "Commission rate")
    if rate is None:
        return result

    if isinstance(value, str) and not RATE_PATTERN.match(value.strip()):
        result.add_error("Commission rate allows at most 2 decimal places")
        return result
    if not isinstance(value, str) and rate != rate.quantize(Decimal("0.01")):
        result.add_error("Commission rate allows at most 2 decimal places")
        return result

    result.cleaned["commission_rate"] = rate
    return result


# ============================================================
# PAYOUT VALIDATION
# ============================================================

def validate_payout(
    data: Dict[str, Any],
    db: Session,
    barbershop_id: int,
) -> ValidationResult:
    """
    Validate a new payout ledger entry.

    Required: professional_id (belonging to the barbershop), gross_amount
    (non-negative number), period_start, period_end (start <= end).
    Optional: commission_rate (0-100, defaults to 50).

    Args:
        data: Dict with payout fields, values may be raw form strings
        db: Database session for the professional lookup
        barbershop_id: Tenant the payout is created for

    Returns:
        ValidationResult with parsed values in `cleaned`
    """
    result = ValidationResult()

    # --- PROFESSIONAL ---
    professional_id = data.get("professional_id")
    if _is_empty(professional_id):
        result.add_error("Professional is required")
    else:
        try:
            professional_id = int(professional_id)
        except (TypeError, ValueError):
            result.add_error("Professional is invalid")
            professional_id = None
        if professional_id is not None:
            professional = db.query(Professional).filter(
                Professional.id == professional_id,
                Professional.barbershop_id == barbershop_id,
            ).first()
            if not professional:
                result.add_error("Professional not found for this barbershop")
            else:
                result.cleaned["professional_id"] = professional.id

    # --- GROSS AMOUNT ---
    gross = None
    try:
        gross = to_decimal(data.get("gross_amount"))
    except ValueError:
        pass
    if gross is None:
        result.add_error("Gross amount must be a valid number")
    elif gross < 0:
        result.add_error("Gross amount cannot be negative")
    elif gross >= MAX_AMOUNT:
        result.add_error("Gross amount is too large")
    else:
        result.cleaned["gross_amount"] = gross

    # --- RATE (defaults to 50 like the creation form) ---
    raw_rate = data.get("commission_rate")
    if _is_empty(raw_rate):
        raw_rate = "50"
    rate = _parse_percent(raw_rate, result, "Commission rate")
    if rate is not None:
        result.cleaned["commission_rate"] = rate

    # --- PERIOD ---
    period = {}
    for key, label in (("period_start", "Period start"), ("period_end", "Period end")):
        if _is_empty(data.get(key)):
            result.add_error(f"{label} is required")
            continue
        try:
            period[key] = to_date(data.get(key))
        except ValueError:
            result.add_error(f"{label} must be a valid date")

    if len(period) == 2 and period["period_start"] > period["period_end"]:
        result.add_error("Period start must be on or before period end")
    else:
        result.cleaned.update(period)

    notes = data.get("notes")
    result.cleaned["notes"] = notes.strip() if isinstance(notes, str) and notes.strip() else None

    return result
