from barberdesk.routes.commissions import router as commissions_router
from barberdesk.routes.payouts import router as payouts_router
from barberdesk.routes.commission_items import router as commission_items_router

__all__ = [
    'commissions_router',
    'payouts_router',
    'commission_items_router',
]
