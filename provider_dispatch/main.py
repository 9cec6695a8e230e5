"""
Provider Dispatch — matching, dispatch, and outreach-SLA engine over HTTP.

The engine is a set of pure functions; this app only validates payloads,
calls them, and returns the results. Nothing is persisted here.
"""
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .logging_config import setup_logging
from .routers import dispatch, matching, sla
from .schemas.errors import ErrorResponse, ValidationIssue
from .services.dispatch_readiness import NotReadyLogSink


# --- App Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # One dedupe scope for not-ready diagnostics per process
    app.state.readiness_log_sink = NotReadyLogSink()
    logger.info("Provider dispatch started", version=__version__)
    yield


app = FastAPI(title="Provider Dispatch", version=__version__, lifespan=lifespan)


# --- Request ID middleware ---
@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "")


# --- Error handlers ---
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = ErrorResponse(
        error=str(exc.detail),
        status_code=exc.status_code,
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(
        error="Validation failed",
        status_code=422,
        request_id=_request_id(request),
        detail=[
            ValidationIssue(loc=list(e.get("loc", [])), msg=e.get("msg", ""), type=e.get("type", ""))
            for e in exc.errors()
        ],
    )
    return JSONResponse(status_code=422, content=body.model_dump())


app.include_router(matching.router)
app.include_router(dispatch.router)
app.include_router(sla.router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}
