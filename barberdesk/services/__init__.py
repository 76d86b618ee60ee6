from barberdesk.services.commission import (
    resolve_rate,
    filter_bookings,
    aggregate_commissions,
    compute_totals,
    build_commission_report,
    load_commission_report,
)
from barberdesk.services.periods import quick_range, preset_range
from barberdesk.services.payouts import (
    create_payout,
    set_payout_status,
    toggle_payout_status,
    list_payouts,
    summarize_payouts,
)
from barberdesk.services.rates import (
    update_commission_rate,
    list_professionals_with_rates,
    list_rate_history,
)
from barberdesk.services.commission_items import (
    list_commission_items,
    commission_kpis,
    commission_chart_data,
    mark_commission_items_paid,
)

__all__ = [
    'resolve_rate',
    'filter_bookings',
    'aggregate_commissions',
    'compute_totals',
    'build_commission_report',
    'load_commission_report',
    'quick_range',
    'preset_range',
    'create_payout',
    'set_payout_status',
    'toggle_payout_status',
    'list_payouts',
    'summarize_payouts',
    'update_commission_rate',
    'list_professionals_with_rates',
    'list_rate_history',
    'list_commission_items',
    'commission_kpis',
    'commission_chart_data',
    'mark_commission_items_paid',
]
