"""
Order persistence.

Any authenticated user may edit or delete any order unless the store is
built with ``enforce_ownership=True``, in which case a non-admin only sees
the orders they placed and gets NotFoundError for the rest.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.core.errors import NotFoundError, ValidationError
from foodorder.models import MAX_ID, Order, User

logger = logging.getLogger(__name__)


class OrderStore:

    def __init__(self, session: AsyncSession, enforce_ownership: bool = False):
        self.session = session
        self.enforce_ownership = enforce_ownership

    async def create(
        self,
        user: User,
        owner: Optional[str] = None,
        restaurant: Optional[str] = None,
        food: Optional[str] = None,
        drink: Optional[str] = None,
    ) -> Order:
        try:
            order = Order(
                owner=owner if (owner or "").strip() else user.name,
                user_id=user.id,
                restaurant=restaurant,
                food=food,
                drink=drink,
            )
        except ValueError as e:
            raise ValidationError(str(e))

        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)

        logger.info(f"Order #{order.id} created by user #{user.id}")
        return order

    async def list_for_user(self, user: User) -> Sequence[Order]:
        result = await self.session.execute(
            select(Order).where(Order.user_id == user.id).order_by(Order.id)
        )
        return result.scalars().all()

    async def list_all(self) -> Sequence[Order]:
        result = await self.session.execute(select(Order).order_by(Order.id))
        return result.scalars().all()

    async def get(self, order_id: int, actor: Optional[User] = None) -> Order:
        order = None
        if 1 <= int(order_id) <= MAX_ID:
            order = await self.session.get(Order, int(order_id))
        if order is None or not self._may_touch(order, actor):
            raise NotFoundError(f"Order #{order_id} not found")
        return order

    def _may_touch(self, order: Order, actor: Optional[User]) -> bool:
        if not self.enforce_ownership or actor is None:
            return True
        return actor.is_admin or order.user_id == actor.id

    async def update(
        self,
        order_id: int,
        actor: Optional[User] = None,
        **fields: Optional[str],
    ) -> Order:
        """Overwrite the given fields; ``None`` values are left unchanged."""
        order = await self.get(order_id, actor)
        for key in ("restaurant", "food", "drink"):
            value = fields.get(key)
            if value is not None:
                setattr(order, key, value)

        await self.session.commit()
        await self.session.refresh(order)

        logger.info(f"Order #{order.id} updated")
        return order

    async def delete(self, order_id: int, actor: Optional[User] = None) -> Order:
        order = await self.get(order_id, actor)
        await self.session.delete(order)
        await self.session.commit()

        logger.info(f"Order #{order_id} deleted")
        return order
