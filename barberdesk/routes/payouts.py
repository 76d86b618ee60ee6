from typing import Optional, Union

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from barberdesk.database import get_db
from barberdesk.models import Barbershop
from barberdesk.routes.commissions import parse_professional_id
from barberdesk.services.commission import ALL, to_date
from barberdesk.services.payouts import (
    create_payout,
    get_payout,
    list_payouts,
    payout_to_dict,
    set_payout_status,
    summarize_payouts,
    toggle_payout_status,
)
from barberdesk.tenancy import get_barbershop

router = APIRouter(prefix="/barbershops/{slug}/payouts", tags=["payouts"])


class PayoutCreateRequest(BaseModel):
    professional_id: Optional[int] = None
    gross_amount: Optional[Union[float, str]] = None
    commission_rate: Optional[Union[float, str]] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    notes: Optional[str] = None


class PayoutStatusRequest(BaseModel):
    status: Optional[str] = None


# ---------------------------------------------------------------------------
# JSON: list with pending/paid summary
# ---------------------------------------------------------------------------
@router.get("/api", response_class=JSONResponse)
async def payout_list(
    professional_id: Optional[str] = None,
    status: str = ALL,
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        payouts = list_payouts(
            db,
            barbershop.id,
            professional_id=parse_professional_id(professional_id),
            status=status,
            period_start=to_date(period_start) if period_start else None,
            period_end=to_date(period_end) if period_end else None,
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    summary = summarize_payouts(payouts)
    return {
        "payouts": [payout_to_dict(p) for p in payouts],
        "summary": {key: float(value) for key, value in summary.items()},
    }


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------
@router.post("/api", response_class=JSONResponse)
async def payout_create(
    payload: PayoutCreateRequest,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        payout = create_payout(db, barbershop.id, payload.model_dump())
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    return JSONResponse(payout_to_dict(payout), status_code=201)


@router.post("/add")
async def payout_add_form(
    request: Request,
    professional_id: str = Form(""),
    gross_amount: str = Form(""),
    commission_rate: str = Form("50"),
    period_start: str = Form(""),
    period_end: str = Form(""),
    notes: str = Form(""),
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    redirect_url = f"/barbershops/{barbershop.slug}/commissions"
    try:
        create_payout(
            db,
            barbershop.id,
            {
                "professional_id": professional_id,
                "gross_amount": gross_amount,
                "commission_rate": commission_rate,
                "period_start": period_start,
                "period_end": period_end,
                "notes": notes,
            },
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    return RedirectResponse(url=redirect_url, status_code=303)


# ---------------------------------------------------------------------------
# Status update (explicit status, or toggle when omitted)
# ---------------------------------------------------------------------------
@router.post("/{payout_id}/status", response_class=JSONResponse)
async def payout_status(
    payout_id: int,
    payload: Optional[PayoutStatusRequest] = None,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    payout = get_payout(db, barbershop.id, payout_id)
    if not payout:
        raise HTTPException(status_code=404, detail="Payout not found")

    try:
        if payload is None or payload.status is None:
            payout = toggle_payout_status(db, payout)
        else:
            payout = set_payout_status(db, payout, payload.status)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return {"ok": True, **payout_to_dict(payout)}
