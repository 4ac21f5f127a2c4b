from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockalerts.api.v1.routes_alerts import router as alerts_router
from stockalerts.core.errors import (
    ForbiddenError,
    GatewayTimeoutError,
    InvalidArgumentError,
    NotFoundError,
    StockAlertError,
    UnavailableError,
)
from stockalerts.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

ERROR_STATUS = {
    InvalidArgumentError: 400,
    ForbiddenError: 403,
    NotFoundError: 404,
    GatewayTimeoutError: 408,
    UnavailableError: 503,
}

app = FastAPI(title="stockalerts")

app.include_router(alerts_router)


def status_for(exc: StockAlertError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


@app.exception_handler(StockAlertError)
async def stock_alert_error_handler(request: Request, exc: StockAlertError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.opt(exception=exc).error(f"{request.method} {request.url.path} failed: {exc.error}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error} ({exc.message})")
    return JSONResponse(status_code=status_code, content={"error": exc.error, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": "An unexpected error occurred"},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
