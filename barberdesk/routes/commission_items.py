from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from barberdesk.database import get_db
from barberdesk.models import Barbershop
from barberdesk.routes.commissions import parse_professional_id
from barberdesk.services.commission import ALL, to_date
from barberdesk.services.commission_items import (
    CommissionItemFilters,
    commission_chart_data,
    commission_kpis,
    item_to_dict,
    list_commission_items,
    load_commission_items,
    mark_commission_items_paid,
)
from barberdesk.tenancy import get_barbershop

router = APIRouter(prefix="/barbershops/{slug}/commission-items", tags=["commission-items"])


class MarkPaidRequest(BaseModel):
    item_ids: List[int] = []
    note: Optional[str] = None
    paid_by_user_id: Optional[int] = None


def build_item_filters(
    period: str = "month",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    professional_id: Optional[str] = None,
    payment_status: str = ALL,
) -> CommissionItemFilters:
    return CommissionItemFilters(
        period_preset=period,
        start_date=to_date(start_date) if start_date else None,
        end_date=to_date(end_date) if end_date else None,
        professional_id=parse_professional_id(professional_id),
        payment_status=payment_status,
    )


def _serialize(values: dict) -> dict:
    return {key: float(value) for key, value in values.items()}


@router.get("/api", response_class=JSONResponse)
async def commission_item_list(
    period: str = "month",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    professional_id: Optional[str] = None,
    payment_status: str = ALL,
    page: int = 1,
    page_size: int = 10,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        filters = build_item_filters(period, start_date, end_date, professional_id, payment_status)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    items, count = list_commission_items(db, barbershop.id, filters, page, page_size)
    return {"items": [item_to_dict(i) for i in items], "count": count, "page": page}


@router.get("/api/kpis", response_class=JSONResponse)
async def commission_item_kpis(
    period: str = "month",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    professional_id: Optional[str] = None,
    payment_status: str = ALL,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        filters = build_item_filters(period, start_date, end_date, professional_id, payment_status)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return _serialize(commission_kpis(load_commission_items(db, barbershop.id, filters)))


@router.get("/api/chart", response_class=JSONResponse)
async def commission_item_chart(
    period: str = "month",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    professional_id: Optional[str] = None,
    payment_status: str = ALL,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        filters = build_item_filters(period, start_date, end_date, professional_id, payment_status)
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    data = commission_chart_data(load_commission_items(db, barbershop.id, filters))
    return {
        series: [{**row, "value": float(row["value"])} for row in rows]
        for series, rows in data.items()
    }


@router.post("/api/mark-paid", response_class=JSONResponse)
async def commission_items_mark_paid(
    payload: MarkPaidRequest,
    barbershop: Barbershop = Depends(get_barbershop),
    db: Session = Depends(get_db),
):
    try:
        log = mark_commission_items_paid(
            db,
            barbershop.id,
            payload.item_ids,
            paid_by_user_id=payload.paid_by_user_id,
            note=payload.note,
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=400)

    return {"ok": True, "log_id": log.id, "item_ids": log.commission_item_ids}
