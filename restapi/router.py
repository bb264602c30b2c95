"""Application configuration and router setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import fastapi
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tracker.bank.gateway import PlaidGateway
from tracker.core.config import Settings, get_settings
from tracker.core.schemas import ErrorResponse, FieldError
from tracker.payment.gateway import StripeGateway
from tracker.storage.base import Storage
from tracker.storage.factory import create_storage
from restapi.endpoints import (
    analytics,
    auth,
    bank,
    budget,
    category,
    currency,
    export,
    goal,
    health_check,
    loan,
    payment,
    transaction,
    user,
)

logger = logging.getLogger(__name__)

TITLE = "Finance Tracker"
DESCRIPTION = "Personal and business finance tracking API"

# Request parts that carry no information for the client
LOCATION_PREFIXES = ("body", "query", "path", "header")


def field_errors(exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        location = list(error["loc"])
        if location and location[0] in LOCATION_PREFIXES:
            location = location[1:]
        errors.append(FieldError(
            field=".".join(str(part) for part in location) or "body",
            message=error["msg"],
            type=error["type"],
        ))
    return errors


def add_exception_handlers(app: fastapi.FastAPI) -> None:
    """Reshape every error into the {message[, errors]} envelope."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: fastapi.Request, exc: RequestValidationError):
        body = ErrorResponse(message="Invalid request data", errors=field_errors(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(body),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: fastapi.Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: fastapi.Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    stripe_gateway: Optional[StripeGateway] = None,
    plaid_gateway: Optional[PlaidGateway] = None,
) -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if storage is None:
        storage = create_storage(settings)
    if stripe_gateway is None:
        stripe_gateway = StripeGateway(settings.STRIPE_SECRET_KEY, settings.STRIPE_WEBHOOK_SECRET)
    if plaid_gateway is None and settings.plaid_configured:
        plaid_gateway = PlaidGateway(settings.PLAID_CLIENT_ID, settings.PLAID_SECRET, settings.PLAID_ENV)

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI):
        await storage.initialize()
        await storage.seed_default_categories()
        yield
        await storage.close()

    app = fastapi.FastAPI(
        title=TITLE,
        description=DESCRIPTION,
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.stripe = stripe_gateway
    app.state.plaid = plaid_gateway

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(transaction.router)
    app.include_router(category.router)
    app.include_router(loan.router)
    app.include_router(budget.router)
    app.include_router(goal.router)
    app.include_router(analytics.router)
    app.include_router(export.router)
    app.include_router(currency.router)
    app.include_router(payment.router)
    app.include_router(bank.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=TITLE,
            version=settings.API_VERSION,
            description=DESCRIPTION,
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
