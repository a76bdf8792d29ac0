"""FastAPI application factory.

Maps the domain exception hierarchy to HTTP status codes in one place so
routes stay free of try/except blocks. Every error body has the shape
``{"message": ...}``.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from candystore.domain.exceptions import (
    BusinessRuleViolation,
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from candystore.domain.repository.unit_of_work import UnitOfWork
from candystore.domain.service.logging_utils import configure_logging
from candystore.infrastructure import bootstrap
from candystore.infrastructure.api.three_pack_routes import router as three_pack_router
from candystore.infrastructure.config import get_settings

logger = logging.getLogger(__name__)

_STATUS_BY_EXCEPTION = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolation, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainException) -> int:
    for exc_type, code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return code
    # DuplicateCartLineError only escapes after the retry was used up
    return status.HTTP_409_CONFLICT


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    body: dict = {"message": str(exc)}
    if isinstance(exc, InsufficientStockError):
        body["limiting_factor"] = {
            "flavor_name": exc.flavor_name,
            "available": exc.available,
            "required": exc.required,
        }
    return JSONResponse(status_code=status_for(exc), content=body)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request", "errors": jsonable_errors(exc)},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(uow_factory: Optional[Callable[[], UnitOfWork]] = None) -> FastAPI:
    """Build the API.

    Without *uow_factory* the app talks to the configured database.
    """
    if uow_factory is None:
        configure_logging(get_settings().log_level)
        uow_factory = bootstrap.unit_of_work

    app = FastAPI(title="candystore", description="3-pack inventory and reservation API")
    app.state.uow_factory = uow_factory

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(three_pack_router)
    return app
