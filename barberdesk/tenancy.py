from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from barberdesk.database import get_db
from barberdesk.models import Barbershop


def get_barbershop(slug: str, db: Session = Depends(get_db)) -> Barbershop:
    """Resolve the `{slug}` path parameter to an active barbershop or 404."""
    barbershop = (
        db.query(Barbershop)
        .filter(Barbershop.slug == slug, Barbershop.is_active == True)  # noqa: E712
        .first()
    )
    if not barbershop:
        raise HTTPException(status_code=404, detail="Barbershop not found")
    return barbershop
