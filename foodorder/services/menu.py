"""Menu item persistence."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodorder.core.errors import NotFoundError, ValidationError
from foodorder.models import MAX_ID, MenuItem

logger = logging.getLogger(__name__)


class MenuStore:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        restaurant: str,
        food: Optional[str] = None,
        drink: Optional[str] = None,
    ) -> MenuItem:
        try:
            item = MenuItem(restaurant=restaurant, food=food, drink=drink)
        except ValueError as e:
            raise ValidationError(str(e))

        self.session.add(item)
        await self.session.commit()
        await self.session.refresh(item)

        logger.info(f"Menu item #{item.id} created for {item.restaurant}")
        return item

    async def list_all(self) -> Sequence[MenuItem]:
        result = await self.session.execute(select(MenuItem).order_by(MenuItem.id))
        return result.scalars().all()

    async def get(self, item_id: int) -> MenuItem:
        item = None
        if 1 <= int(item_id) <= MAX_ID:
            item = await self.session.get(MenuItem, int(item_id))
        if item is None:
            raise NotFoundError(f"Menu item #{item_id} not found")
        return item

    async def update(self, item_id: int, **fields: Optional[str]) -> MenuItem:
        """Overwrite the given fields; ``None`` values are left unchanged."""
        item = await self.get(item_id)
        try:
            for key in ("restaurant", "food", "drink"):
                value = fields.get(key)
                if value is not None:
                    setattr(item, key, value)
        except ValueError as e:
            raise ValidationError(str(e))

        await self.session.commit()
        await self.session.refresh(item)

        logger.info(f"Menu item #{item.id} updated")
        return item

    async def delete(self, item_id: int) -> MenuItem:
        item = await self.get(item_id)
        await self.session.delete(item)
        await self.session.commit()

        logger.info(f"Menu item #{item_id} deleted")
        return item
