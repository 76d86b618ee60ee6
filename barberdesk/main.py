import logging
import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from barberdesk.routes import (
    commissions_router,
    payouts_router,
    commission_items_router,
)
from barberdesk.database import init_db, DATABASE_URL
from barberdesk.template_config import templates

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="BarberDesk",
    description="Barbershop commissions and payouts",
    version="1.0.0"
)

# Include routers
app.include_router(commissions_router)
app.include_router(payouts_router)
app.include_router(commission_items_router)


@app.on_event("startup")
def on_startup():
    """Ensure DB is reachable and initialized at startup. Creates missing
    tables when using the default SQLite dev DB. If initialization fails the
    app raises and stops with a clear error message.
    """
    try:
        init_db()
    except Exception as e:
        raise RuntimeError(
            f"Database initialization failed for DATABASE_URL={DATABASE_URL}: {e}"
        ) from e


def _wants_json(request: Request) -> bool:
    return "/api/" in request.url.path or request.url.path.endswith("/api")


# Error handlers
@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    """Handle 404 errors."""
    detail = getattr(exc, "detail", None) or "Not found"
    if _wants_json(request):
        return JSONResponse({"error": detail}, status_code=404)
    return templates.TemplateResponse(
        request,
        "errors/404.html",
        {"detail": detail},
        status_code=404
    )


@app.exception_handler(500)
async def server_error_handler(request: Request, exc):
    """Handle 500 errors with a generic message."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    if _wants_json(request):
        return JSONResponse({"error": "Something went wrong. Please try again."}, status_code=500)
    return templates.TemplateResponse(
        request,
        "errors/500.html",
        {},
        status_code=500
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("barberdesk.main:app", host="0.0.0.0", port=8000, reload=True)
