import logging
from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from barberdesk.database import get_db
from barberdesk.models import Barbershop, Professional
from barberdesk.services.commission import ALL, FilterConfig, load_commission_report, to_date
from barberdesk.services.payouts import list_payouts, summarize_payouts
from barberdesk.services.periods import month_bounds, quick_range
from barberdesk.services.rates import (
    get_professional,
    history_to_dict,
    list_professionals_with_rates,
    list_rate_history,
    update_commission_rate,
)
from barberdesk.template_config import local_today, templates
from barberdesk.tenancy import get_barbershop

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/barbershops/{slug}/commissions", tags=["commissions"])


def parse_professional_id(value: Optional[str]) -> Union[int, str]:
    """Query-string professional selector: "all" (or blank) or an integer id."""
    if value is None or value.strip() in ("", ALL):
        return ALL
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid professional '{value}'")


def build_filters(
    date_start: Optional[str],
    date_end: Optional[str],
    professional_id: Optional[str],
    period: Optional[str] = None,
    today: Optional[date] = None,
) -> FilterConfig:
    """Build a FilterConfig from query params. Defaults to the current month."""
    today = today or local_today()
    if period:
        start, end = quick_range(period, today)
    else:
        default_start, default_end = month_bounds(today)
        start = to_date(date_start) if date_start else default_start
        end = to_date(date_end) if date_end else default_end
    return FilterConfig(start, end, parse_professional_id(professional_id))


# ---------------------------------------------------------------------------
# Dashboard page
# ---------------------------------------------------------------------------
@router.get("", response_class=HTMLResponse)
async def commission_dashboard(
    request: Request,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    params = request.query_params
    error = None
    try:
        filters = build_filters(
            params.get("date_start"),
            params.get("date_end"),
            params.get("professional_id"),
            params.get("period"),
        )
    except ValueError as e:
        error = str(e)
        filters = build_filters(None, None, None)

    payment_status = params.get("payment_status") or ALL
    report = load_commission_report(db, barbershop.id, filters)
    payouts = list_payouts(
        db, barbershop.id, professional_id=filters.professional_id, status=payment_status
    )
    professionals = (
        db.query(Professional)
        .filter(Professional.barbershop_id == barbershop.id)
        .order_by(Professional.name)
        .all()
    )

    return templates.TemplateResponse(
        request,
        "commissions/dashboard.html",
        {
            "barbershop": barbershop,
            "report": report,
            "filters": filters,
            "payment_status": payment_status,
            "payouts": payouts,
            "payout_summary": summarize_payouts(payouts),
            "professionals": professionals,
            "error": error,
        },
    )


# ---------------------------------------------------------------------------
# JSON: live aggregation
# ---------------------------------------------------------------------------
@router.get("/api/report", response_class=JSONResponse)
async def commission_report(
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
    professional_id: Optional[str] = None,
    period: Optional[str] = None,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        filters = build_filters(date_start, date_end, professional_id, period)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return load_commission_report(db, barbershop.id, filters).to_dict()


# ---------------------------------------------------------------------------
# JSON: rates
# ---------------------------------------------------------------------------
class RateUpdateRequest(BaseModel):
    commission_rate: Optional[Union[float, str]] = None
    changed_by_user_id: Optional[int] = None


@router.get("/api/rates", response_class=JSONResponse)
async def professional_rates(
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    return list_professionals_with_rates(db, barbershop.id)


@router.get("/api/rates/history", response_class=JSONResponse)
async def rate_history(
    professional_id: Optional[int] = None,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    entries = list_rate_history(db, barbershop.id, professional_id=professional_id)
    return [history_to_dict(e) for e in entries]


@router.post("/api/rates/{professional_id}", response_class=JSONResponse)
async def update_rate(
    professional_id: int,
    payload: RateUpdateRequest,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    if not get_professional(db, barbershop.id, professional_id):
        raise HTTPException(status_code=404, detail="Professional not found")

    try:
        row = update_commission_rate(
            db,
            barbershop.id,
            professional_id,
            payload.commission_rate,
            changed_by_user_id=payload.changed_by_user_id,
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return {
        "ok": True,
        "professional_id": row.professional_id,
        "commission_rate": float(row.commission_rate),
    }
