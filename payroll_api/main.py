from contextlib import asynccontextmanager
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from payroll_api.core.logging import configure_logging
from payroll_api.models import department, employee, payroll, payroll_item, payroll_item_type  # noqa: F401
from payroll_api.routers.auth import router as auth_router
from payroll_api.routers.departments import router as departments_router
from payroll_api.routers.employees import router as employees_router
from payroll_api.routers.payrolls import item_types_router as payroll_item_types_router
from payroll_api.routers.payrolls import router as payrolls_router

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Payroll administration API starting", extra={"version": APP_VERSION})
    yield


app = FastAPI(
    title="Payroll Administration API",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def catch_unhandled_exceptions(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled exception", extra={"method": request.method, "path": request.url.path})
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


# Registered last so it wraps the handler above and also logs the 500s.
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    response.headers["X-Request-Id"] = request_id
    logger.info(
        "Request handled",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


app.include_router(auth_router)
app.include_router(departments_router)
app.include_router(employees_router)
app.include_router(payrolls_router)
app.include_router(payroll_item_types_router)


@app.get("/")
def root():
    return {"status": "Payroll Administration API running"}


@app.get("/health")
def health():
    return {
        "status": "ok",
        "version": APP_VERSION,
    }
