"""
Order Endpoints (authenticated users)

    POST   /make-order
    GET    /get-orders
    PATCH  /edit-order
    DELETE /delete-order
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.deps import get_app_settings, require_auth
from foodorder.core.config import Settings
from foodorder.database import get_db
from foodorder.models import User
from foodorder.schemas import (
    DeleteRequest,
    ErrorResponse,
    OrderCreate,
    OrderEnvelope,
    OrderResponse,
    OrderUpdate,
)
from foodorder.services.orders import OrderStore

router = APIRouter(
    tags=["Orders"],
    responses={401: {"model": ErrorResponse}},
)


def get_order_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> OrderStore:
    return OrderStore(db, enforce_ownership=settings.enforce_order_ownership)


@router.post(
    "/make-order",
    response_model=OrderEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Place Order",
)
async def make_order(
    body: OrderCreate,
    user: User = Depends(require_auth),
    store: OrderStore = Depends(get_order_store),
) -> OrderEnvelope:
    order = await store.create(
        user,
        owner=body.name,
        restaurant=body.restaurant,
        food=body.food,
        drink=body.drink,
    )
    return OrderEnvelope(order=OrderResponse.model_validate(order))


@router.get(
    "/get-orders",
    response_model=List[OrderResponse],
    summary="List My Orders",
)
async def get_orders(
    user: User = Depends(require_auth),
    store: OrderStore = Depends(get_order_store),
) -> List[OrderResponse]:
    orders = await store.list_for_user(user)
    return [OrderResponse.model_validate(o) for o in orders]


@router.patch(
    "/edit-order",
    response_model=OrderEnvelope,
    responses={404: {"model": ErrorResponse}},
    summary="Edit Order",
)
async def edit_order(
    body: OrderUpdate,
    user: User = Depends(require_auth),
    store: OrderStore = Depends(get_order_store),
) -> OrderEnvelope:
    order = await store.update(
        body.id,
        actor=user,
        restaurant=body.restaurant,
        food=body.food,
        drink=body.drink,
    )
    return OrderEnvelope(order=OrderResponse.model_validate(order))


@router.delete(
    "/delete-order",
    response_model=OrderEnvelope,
    responses={404: {"model": ErrorResponse}},
    summary="Delete Order",
)
async def delete_order(
    body: DeleteRequest,
    user: User = Depends(require_auth),
    store: OrderStore = Depends(get_order_store),
) -> OrderEnvelope:
    order = await store.delete(body.id, actor=user)
    return OrderEnvelope(order=OrderResponse.model_validate(order))
