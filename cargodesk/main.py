"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cargodesk import models  # noqa: F401
from cargodesk.config import configure_logging, get_settings
from cargodesk.core import container
from cargodesk.database import dispose_engine, get_session_factory, initialize_database
from cargodesk.domain.common.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)
from cargodesk.exceptions import CargodeskError
from cargodesk.infrastructure.billing.routers import invoices, payments
from cargodesk.infrastructure.common.rate_limit import limiter
from cargodesk.infrastructure.common.routers import settings as settings_router
from cargodesk.infrastructure.customers.routers import customers
from cargodesk.infrastructure.customs.routers import customs_declarations
from cargodesk.infrastructure.identity.routers import auth, users
from cargodesk.infrastructure.notifications.routers import notifications
from cargodesk.infrastructure.routing.routers import delivery_routes, drivers
from cargodesk.infrastructure.shipping.routers import rates, shipments, tracking
from cargodesk.infrastructure.support.routers import support_tickets
from cargodesk.infrastructure.warehouses.routers import warehouses

settings = get_settings()
logger = logging.getLogger(__name__)


def _bootstrap_admin() -> None:
    session = get_session_factory(settings)()
    try:
        container.db.override(session)
        container.user_management_use_case().ensure_admin(
            settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD
        )
    finally:
        container.db.reset_override()
        session.close()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Set up logging, the database engine and the admin account."""
    if settings.ENVIRONMENT != "test":
        configure_logging(settings.ENVIRONMENT)
        initialize_database(settings)
        _bootstrap_admin()
        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} started")
    yield
    if settings.ENVIRONMENT != "test":
        dispose_engine()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CargodeskError)
async def cargodesk_error_handler(request: Request, exc: CargodeskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(EntityNotFoundError)
async def not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Field errors the client can show next to the offending input."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": exc.field},
    )


@app.exception_handler(InvariantViolationError)
async def invariant_error_handler(request: Request, exc: InvariantViolationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "field": None},
    )


@app.exception_handler(BusinessRuleViolationError)
async def business_rule_handler(
    request: Request, exc: BusinessRuleViolationError
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


@app.exception_handler(DuplicateEntityError)
async def duplicate_handler(request: Request, exc: DuplicateEntityError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!s}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


api_router = APIRouter(prefix=settings.API_V1_PREFIX)


@api_router.get("/")
async def api_root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }


for module in (
    auth,
    users,
    settings_router,
    customers,
    warehouses,
    shipments,
    tracking,
    rates,
    invoices,
    payments,
    customs_declarations,
    support_tickets,
    notifications,
    drivers,
    delivery_routes,
):
    api_router.include_router(module.router)

app.include_router(api_router)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
