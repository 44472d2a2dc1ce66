"""
FastAPI Application Entry Point

RISTOWORD - restaurant order and inventory tracking.

Endpoints:
    - GET /health: Liveness check (plain text)
    - GET /cucina, /cassa, /magazzino: Kitchen, cashier and storeroom pages
    - POST /orders, GET /orders, GET /orders/{id}
    - PATCH /orders/{id}/status, PATCH /orders/{id}/paid
    - GET /inventory, POST /inventory, GET /inventory/{id}
    - PATCH /inventory/{id}/adjust

Both collections are owned by the application (``app.state``) and handed
to routes through dependencies, so tests can build isolated apps with
``create_app(orders=..., inventory=...)``.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional, TypeVar

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ristoword.core.config import Settings, get_settings, setup_logging
from ristoword.models import InventoryItem, Order
from ristoword.schemas import (
    ErrorResponse,
    InventoryAdjust,
    InventoryItemCreate,
    OrderCreate,
    OrderPaidUpdate,
    OrderStatusUpdate,
)
from ristoword.services.collection import JsonCollection
from ristoword.services.exceptions import RistowordError
from ristoword.services.inventory import InventoryService
from ristoword.services.orders import OrderService

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_inventory_service(request: Request) -> InventoryService:
    return request.app.state.inventory_service


def _parse_body(schema: type[BodyT], body: Any) -> BodyT:
    """Any JSON value is accepted; anything but an object reads as ``{}``."""
    if not isinstance(body, dict):
        return schema()
    return schema.model_validate(body)


def _install_services(
    app: FastAPI,
    orders: Optional[JsonCollection[Order]],
    inventory: Optional[JsonCollection[InventoryItem]],
) -> None:
    if orders is not None:
        app.state.order_service = OrderService(orders)
    if inventory is not None:
        app.state.inventory_service = InventoryService(inventory)


# =============================================================================
# ROOT, HEALTH & PAGES
# =============================================================================

@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, Any]:
    """API root with navigation links."""
    settings: Settings = request.app.state.settings
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "pages": {"cucina": "/cucina", "cassa": "/cassa", "magazzino": "/magazzino"},
        "health": "/health",
    }


@router.get("/health", response_class=PlainTextResponse, tags=["Health"])
async def health_check(request: Request) -> str:
    settings: Settings = request.app.state.settings
    return f"{settings.app_name} backend attivo 🚀"


def _page(template_name: str, title: str):
    async def page(request: Request) -> HTMLResponse:
        settings: Settings = request.app.state.settings
        return templates.TemplateResponse(
            request,
            template_name,
            {"app_name": settings.app_name, "title": title},
        )
    return page


router.add_api_route("/cucina", _page("cucina.html", "Cucina"), methods=["GET"],
                     response_class=HTMLResponse, tags=["Pages"])
router.add_api_route("/cassa", _page("cassa.html", "Cassa"), methods=["GET"],
                     response_class=HTMLResponse, tags=["Pages"])
router.add_api_route("/magazzino", _page("magazzino.html", "Magazzino"), methods=["GET"],
                     response_class=HTMLResponse, tags=["Pages"])


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@router.post(
    "/orders",
    response_model=Order,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    body: Any = Body(None),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Create an order; it starts ``in_preparazione`` and unpaid."""
    return service.create(_parse_body(OrderCreate, body))


@router.get("/orders", response_model=list[Order], tags=["Orders"])
async def list_orders(
    status: Optional[str] = Query(None),
    paid: Optional[bool] = Query(None),
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    return service.list_orders(status=status, paid=paid)


@router.get(
    "/orders/{order_id}",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> Order:
    return service.get(order_id)


@router.patch(
    "/orders/{order_id}/status",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Change Order Status",
)
async def update_order_status(
    order_id: str,
    body: Any = Body(None),
    service: OrderService = Depends(get_order_service),
) -> Order:
    return service.set_status(order_id, _parse_body(OrderStatusUpdate, body).status)


@router.patch(
    "/orders/{order_id}/paid",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Mark Order Paid/Unpaid",
)
async def update_order_paid(
    order_id: str,
    body: Any = Body(None),
    service: OrderService = Depends(get_order_service),
) -> Order:
    return service.set_paid(order_id, _parse_body(OrderPaidUpdate, body).paid)


# =============================================================================
# INVENTORY API ENDPOINTS
# =============================================================================

@router.get("/inventory", response_model=list[InventoryItem], tags=["Inventory"])
async def list_inventory(
    service: InventoryService = Depends(get_inventory_service),
) -> list[InventoryItem]:
    return service.list_items()


@router.post(
    "/inventory",
    response_model=InventoryItem,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Inventory"],
    summary="Add Inventory Item",
)
async def create_inventory_item(
    body: Any = Body(None),
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryItem:
    return service.create(_parse_body(InventoryItemCreate, body))


@router.get(
    "/inventory/{item_id}",
    response_model=InventoryItem,
    responses={404: {"model": ErrorResponse}},
    tags=["Inventory"],
)
async def get_inventory_item(
    item_id: str,
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryItem:
    return service.get(item_id)


@router.patch(
    "/inventory/{item_id}/adjust",
    response_model=InventoryItem,
    responses={404: {"model": ErrorResponse}},
    tags=["Inventory"],
    summary="Adjust Stock Quantity",
)
async def adjust_inventory_item(
    item_id: str,
    body: Any = Body(None),
    service: InventoryService = Depends(get_inventory_service),
) -> InventoryItem:
    """Add a signed delta to the stock; non-numeric deltas count as 0."""
    return service.adjust(item_id, _parse_body(InventoryAdjust, body).delta)


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    orders: Optional[JsonCollection[Order]] = None,
    inventory: Optional[JsonCollection[InventoryItem]] = None,
) -> FastAPI:
    """
    Build the application.

    Collections that are not passed in are loaded from the configured
    data files when the application starts.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {settings.app_name}")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info(f"   Data directory: {settings.data_directory}")
        logger.info("=" * 60)

        _install_services(
            app,
            orders=None if hasattr(app.state, "order_service") else JsonCollection(
                settings.orders_path, Order, lock_timeout=settings.file_lock_timeout
            ),
            inventory=None if hasattr(app.state, "inventory_service") else JsonCollection(
                settings.inventory_path, InventoryItem, lock_timeout=settings.file_lock_timeout
            ),
        )

        logger.info(f"✅ Orders: {len(app.state.order_service.collection)}")
        logger.info(f"✅ Inventory items: {len(app.state.inventory_service.collection)}")
        logger.info("✅ Application ready!")

        yield

        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Restaurant order and inventory tracking for kitchen, cashier and storeroom.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    _install_services(app, orders, inventory)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")

    @app.exception_handler(RistowordError)
    async def ristoword_error_handler(request: Request, exc: RistowordError) -> JSONResponse:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.message).model_dump(),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                detail=str(exc) if settings.debug else "An unexpected error occurred",
            ).model_dump(),
        )

    return app


setup_logging()
app = create_app()
