"""
API Routes

Endpoints:
    - GET    /api/orders: List orders, newest first
    - POST   /api/orders: Create an order with its items
    - GET    /api/orders/{order_id}: Get one order (null if unknown)
    - PUT    /api/orders/{order_id}: Replace an order and its items
    - DELETE /api/orders/{order_id}: Delete an order and its items
    - POST   /api/prompts: AI prompt proxy
    - GET    /api/health: Health check
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_trace.database import get_db
from carbon_trace.repository import OrderRepository, OrderStorageError
from carbon_trace.schemas import (
    ChangesEnvelope,
    ErrorResponse,
    HealthResponse,
    OrderCreate,
    OrderEnvelope,
    OrderListEnvelope,
    OrderResponse,
    PromptErrorResponse,
    PromptRequest,
    PromptResponse,
)
from carbon_trace.services.ai import PromptProxy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_repository(db: AsyncSession = Depends(get_db)) -> OrderRepository:
    return OrderRepository(db)


def get_prompt_proxy(request: Request) -> PromptProxy:
    return request.app.state.prompt_proxy


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@router.get(
    "/orders",
    response_model=OrderListEnvelope,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderListEnvelope:
    """All orders with their items, newest first."""
    try:
        orders = await repo.list_orders()
    except OrderStorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return OrderListEnvelope(
        message="success",
        data=[OrderResponse.model_validate(order) for order in orders],
    )


@router.post(
    "/orders",
    response_model=OrderEnvelope,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    order_data: OrderCreate,
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderEnvelope:
    """Create an order and all of its items in one transaction."""
    logger.info(f"Creating order for: {order_data.customer_name}")

    try:
        order = await repo.create_order(
            customer_name=order_data.customer_name,
            items=order_data.items,
            total_price=order_data.total_price,
            total_carbon_saved=order_data.total_carbon_saved,
        )
    except OrderStorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return OrderEnvelope(message="success", data=OrderResponse.model_validate(order))


@router.get(
    "/orders/{order_id}",
    response_model=OrderEnvelope,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: int,
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderEnvelope:
    """Get a specific order by ID; ``data`` is null when it does not exist."""
    try:
        order = await repo.get_order(order_id)
    except OrderStorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return OrderEnvelope(
        message="success",
        data=OrderResponse.model_validate(order) if order else None,
    )


@router.put(
    "/orders/{order_id}",
    response_model=ChangesEnvelope,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def update_order(
    order_id: int,
    order_data: OrderCreate,
    repo: OrderRepository = Depends(get_order_repository),
) -> ChangesEnvelope:
    """Overwrite an order and replace its whole item list."""
    try:
        changes = await repo.update_order(
            order_id=order_id,
            customer_name=order_data.customer_name,
            items=order_data.items,
            total_price=order_data.total_price,
            total_carbon_saved=order_data.total_carbon_saved,
        )
    except OrderStorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ChangesEnvelope(message="success", changes=changes)


@router.delete(
    "/orders/{order_id}",
    response_model=ChangesEnvelope,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def delete_order(
    order_id: int,
    repo: OrderRepository = Depends(get_order_repository),
) -> ChangesEnvelope:
    try:
        changes = await repo.delete_order(order_id)
    except OrderStorageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ChangesEnvelope(message="deleted", changes=changes)


# =============================================================================
# AI PROMPT ENDPOINT
# =============================================================================

@router.post(
    "/prompts",
    response_model=PromptResponse,
    responses={500: {"model": PromptErrorResponse}},
    tags=["AI"],
    summary="AI Prompt Proxy",
)
async def answer_prompt(
    payload: PromptRequest,
    proxy: PromptProxy = Depends(get_prompt_proxy),
):
    """
    Forward a prompt to the configured model.

    Without a credential, or when the model fails, carbon estimate and
    reduction suggestion prompts get local answers. Other prompts get an
    apology, with status 500 if the model actually failed.
    """
    answer = await proxy.answer(payload.prompt, kind=payload.kind)

    if not answer.success:
        return JSONResponse(
            status_code=answer.status_code,
            content={"error": answer.error, "response": answer.response},
        )

    return PromptResponse(response=answer.response)


# =============================================================================
# HEALTH ENDPOINT
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(request: Request) -> HealthResponse:
    """Liveness plus whether a real AI credential is configured."""
    settings = request.app.state.settings

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        has_api_key=settings.has_ai_credential,
    )
