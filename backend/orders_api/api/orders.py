"""Order intake endpoint used by the storefront checkout."""

from typing import Any

import structlog
from fastapi import APIRouter, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orders_api.api.cors import cors_headers, request_origin
from orders_api.api.dependencies import ClockDep, SettingsDep, StoreFactoryDep
from orders_api.services.exceptions import (
    ConfigurationError,
    MethodError,
    ParseError,
    ServiceError,
    ValidationError,
)
from orders_api.services.external.github import DocumentStoreError
from orders_api.services.orders.order_service import (
    OrderService,
    normalize_order,
    parse_order,
    validate_order,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["orders"])


def _json(status_code: int, content: dict[str, Any], origin: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=cors_headers(origin))


def _error_response(exc: ServiceError, origin: str) -> JSONResponse:
    """Translate a service exception into the client-facing error body."""
    if isinstance(exc, MethodError):
        return _json(405, {"error": "Method not allowed"}, origin)
    if isinstance(exc, ConfigurationError):
        return _json(500, {"error": "Orders API not configured (missing env)"}, origin)
    if isinstance(exc, ParseError):
        return _json(400, {"error": "Invalid JSON body"}, origin)
    if isinstance(exc, ValidationError):
        return _json(400, {"error": "Order must include fullName and phone"}, origin)
    return _json(500, {"error": "Failed to save order", "detail": str(exc)}, origin)


@router.options("/orders", include_in_schema=False)
async def preflight_orders(request: Request) -> Response:
    """Answer a CORS preflight. Works without any store configuration."""
    return Response(status_code=204, headers=cors_headers(request_origin(request)))


@router.post("/orders", operation_id="createOrder")
async def create_order(
    request: Request,
    settings: SettingsDep,
    store_factory: StoreFactoryDep,
    clock: ClockDep,
) -> JSONResponse:
    """
    Record a new storefront order.

    1. Check the store configuration (no network calls when incomplete)
    2. Parse the JSON body and require fullName or phone
    3. Assign id and status when missing
    4. Prepend the order to the store document, conditional on its sha
    """
    origin = request_origin(request)

    try:
        config = settings.store_config()
    except ConfigurationError as e:
        logger.error("Orders API not configured", missing=e.missing)
        return _error_response(e, origin)

    body = await request.body()
    try:
        order = parse_order(body)
        validate_order(order)
    except (ParseError, ValidationError) as e:
        logger.info("Rejected order", reason=str(e))
        return _error_response(e, origin)

    normalize_order(order, clock)

    service = OrderService(store_factory(config), clock=clock)
    try:
        order_id = await service.append_order(order)
    except DocumentStoreError as e:
        logger.error("Failed to save order", order_id=order.id, error=str(e))
        return _error_response(e, origin)
    except Exception as e:
        logger.exception("Failed to save order", order_id=order.id)
        return _json(500, {"error": "Failed to save order", "detail": str(e)}, origin)

    return _json(200, {"ok": True, "id": order_id}, origin)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer a routing 405 with the orders error body and CORS headers.

    Covers every method without a route, custom verbs included. Other HTTP
    errors keep FastAPI's default rendering.
    """
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    logger.info("Rejected request method", method=request.method, path=request.url.path)
    return _error_response(MethodError(request.method), request_origin(request))
