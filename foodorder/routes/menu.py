"""
Menu Endpoints

    POST   /create-menu   admin
    GET    /get-menu      anyone
    PATCH  /edit-menu     admin
    DELETE /delete-menu   admin
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.auth.deps import attach_user, require_admin
from foodorder.database import get_db
from foodorder.models import User
from foodorder.schemas import (
    DeleteRequest,
    ErrorResponse,
    MenuCreate,
    MenuEnvelope,
    MenuResponse,
    MenuUpdate,
)
from foodorder.services.menu import MenuStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Menu"])

ADMIN_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


def get_menu_store(db: AsyncSession = Depends(get_db)) -> MenuStore:
    return MenuStore(db)


@router.post(
    "/create-menu",
    response_model=MenuEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=ADMIN_ERRORS,
    summary="Create Menu Item",
)
async def create_menu(
    body: MenuCreate,
    admin: User = Depends(require_admin),
    store: MenuStore = Depends(get_menu_store),
) -> MenuEnvelope:
    item = await store.create(body.restaurant, food=body.food, drink=body.drink)
    return MenuEnvelope(menu=MenuResponse.model_validate(item))


@router.get(
    "/get-menu",
    response_model=List[MenuResponse],
    summary="List Menu",
)
async def get_menu(
    user: Optional[User] = Depends(attach_user),
    store: MenuStore = Depends(get_menu_store),
) -> List[MenuResponse]:
    items = await store.list_all()
    if user is not None:
        logger.debug(f"Menu requested by user #{user.id}")
    return [MenuResponse.model_validate(i) for i in items]


@router.patch(
    "/edit-menu",
    response_model=MenuEnvelope,
    responses={**ADMIN_ERRORS, 404: {"model": ErrorResponse}},
    summary="Edit Menu Item",
)
async def edit_menu(
    body: MenuUpdate,
    admin: User = Depends(require_admin),
    store: MenuStore = Depends(get_menu_store),
) -> MenuEnvelope:
    item = await store.update(
        body.id,
        restaurant=body.restaurant,
        food=body.food,
        drink=body.drink,
    )
    return MenuEnvelope(menu=MenuResponse.model_validate(item))


@router.delete(
    "/delete-menu",
    response_model=MenuEnvelope,
    responses={**ADMIN_ERRORS, 404: {"model": ErrorResponse}},
    summary="Delete Menu Item",
)
async def delete_menu(
    body: DeleteRequest,
    admin: User = Depends(require_admin),
    store: MenuStore = Depends(get_menu_store),
) -> MenuEnvelope:
    item = await store.delete(body.id)
    return MenuEnvelope(menu=MenuResponse.model_validate(item))
