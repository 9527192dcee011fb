# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import (
    advice,
    budgets,
    dashboard,
    disbursements,
    health,
    loans,
    repayments,
    students,
    transactions,
)
from .schemas.error import ErrorResponse
from .services.amortization import InvalidLoanTerms, NonAmortizingPayment
from .services.budget_variance import DuplicateCategory, InvalidBudgetPeriod
from .services.oracle import log_oracle_status

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    log_oracle_status()
    yield


app = FastAPI(
    title="HelbFlow API",
    description="Student loan disbursement, budgeting and repayment tracking",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}

# Domain errors raised by the engines, mapped to (status, code)
_DOMAIN_ERRORS: dict[type[Exception], tuple[int, str]] = {
    NonAmortizingPayment: (422, "non_amortizing_payment"),
    InvalidLoanTerms: (422, "invalid_loan_terms"),
    InvalidBudgetPeriod: (422, "invalid_budget_period"),
    DuplicateCategory: (409, "duplicate_category"),
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _build_error(
    status_code: int, detail: str, request_id: str, code: str | None = None
) -> JSONResponse:
    body = ErrorResponse(
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        code=code,
        request_id=request_id,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    return _build_error(exc.status_code, str(exc.detail), _request_id(request))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    return _build_error(422, str(exc.errors()), _request_id(request), code="validation_error")


async def domain_exception_handler(request: Request, exc: Exception):
    """Convert engine errors to RFC 7807 Problem Details."""
    status_code, code = next(
        mapping for err_type, mapping in _DOMAIN_ERRORS.items() if isinstance(exc, err_type)
    )
    return _build_error(status_code, str(exc), _request_id(request), code=code)


for _err_type in _DOMAIN_ERRORS:
    app.add_exception_handler(_err_type, domain_exception_handler)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    return _build_error(500, "An unexpected error occurred.", request_id)


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(students.router, prefix="/api/students", tags=["students"])
app.include_router(disbursements.router, prefix="/api/disbursements", tags=["disbursements"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["transactions"])
app.include_router(budgets.router, prefix="/api/budgets", tags=["budgets"])
app.include_router(loans.router, prefix="/api/loans", tags=["loans"])
app.include_router(repayments.router, prefix="/api/repayments", tags=["repayments"])
app.include_router(advice.router, prefix="/api/ai-advice", tags=["ai-advice"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the HelbFlow API"}
