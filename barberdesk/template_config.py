"""Centralized Jinja2 template configuration with timezone support."""
import os
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo

from fastapi.templating import Jinja2Templates

# App timezone setting - defaults to Brasilia time
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "R$")
TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")


def get_app_tz() -> ZoneInfo:
    """Get the application timezone."""
    return ZoneInfo(APP_TIMEZONE)


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime. Use this instead of datetime.now()."""
    return datetime.now(timezone.utc)


def local_today() -> date:
    """Today's calendar date in the app timezone."""
    return utc_now().astimezone(get_app_tz()).date()


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the app's local timezone for display.

    Naive datetimes are assumed to be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(get_app_tz())


def localdate(value, fmt: str = None) -> str:
    """Jinja filter to render a date or UTC datetime as a local date string.

    Usage in templates:
        {{ payout.period_start | localdate }}
        {{ payout.paid_at | localdate('%d/%m/%Y') }}
    """
    if value is None:
        return ""

    if isinstance(value, datetime):
        value = to_local(value)

    # Default format: "15/01/2025"
    return value.strftime(fmt or "%d/%m/%Y")


def money(value) -> str:
    """Jinja filter to render a monetary amount rounded to cents."""
    amount = Decimal(str(value or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{CURRENCY_SYMBOL} {amount:,.2f}"


def create_templates() -> Jinja2Templates:
    """Create a Jinja2Templates instance with custom filters."""
    templates = Jinja2Templates(directory=TEMPLATE_DIR)

    templates.env.filters["localdate"] = localdate
    templates.env.filters["money"] = money

    return templates


# Singleton template instance - import this in route files
templates = create_templates()
