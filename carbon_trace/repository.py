"""
Order Repository

The five order operations (list, create, read, update, delete).
Every write runs in one transaction: the order row and its items
commit together or not at all.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from carbon_trace.database import SQLITE_MAX_INTEGER
from carbon_trace.models import Order, OrderItem
from carbon_trace.schemas import OrderItemCreate

logger = logging.getLogger(__name__)


class OrderStorageError(Exception):
    """A storage statement was rejected; carries the driver's message."""


def _storage_message(exc: SQLAlchemyError) -> str:
    # Prefer the DB-API message over SQLAlchemy's statement dump
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _storable_id(order_id: int) -> bool:
    return -SQLITE_MAX_INTEGER - 1 <= order_id <= SQLITE_MAX_INTEGER


class OrderRepository:
    """Order persistence on top of a single AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =====================================================
    # QUERIES
    # =====================================================

    async def list_orders(self) -> Sequence[Order]:
        """All orders, newest first, with items loaded."""
        try:
            result = await self.db.execute(
                select(Order).order_by(Order.timestamp.desc(), Order.id.desc())
            )
            return result.scalars().all()
        except SQLAlchemyError as e:
            raise OrderStorageError(_storage_message(e)) from e

    async def get_order(self, order_id: int) -> Optional[Order]:
        """One order with its items, or None when the id is unknown."""
        if not _storable_id(order_id):
            return None

        try:
            result = await self.db.execute(
                select(Order)
                .where(Order.id == order_id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise OrderStorageError(_storage_message(e)) from e

    # =====================================================
    # COMMANDS
    # =====================================================

    async def create_order(
        self,
        customer_name: str,
        items: Sequence[OrderItemCreate],
        total_price: float,
        total_carbon_saved: float,
    ) -> Order:
        """
        Insert the order row, then one row per item using the new id.

        Raises:
            OrderStorageError: if any insert is rejected; nothing is kept
        """
        try:
            order = Order(
                customer_name=customer_name,
                total_price=total_price,
                total_carbon_saved=total_carbon_saved,
            )
            self.db.add(order)
            await self.db.flush()

            self._add_items(order.id, items)
            await self.db.flush()
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Order insert rejected: {_storage_message(e)}")
            raise OrderStorageError(_storage_message(e)) from e

        logger.info(f"Order #{order.id} created with {len(items)} item(s)")
        return await self.get_order(order.id)

    async def update_order(
        self,
        order_id: int,
        customer_name: str,
        items: Sequence[OrderItemCreate],
        total_price: float,
        total_carbon_saved: float,
    ) -> int:
        """
        Overwrite the order fields and replace its whole item set.

        Returns:
            int: rows changed by the order-row update (0 if the id is unknown,
            in which case no items are touched)
        """
        if not _storable_id(order_id):
            return 0

        try:
            result = await self.db.execute(
                update(Order)
                .where(Order.id == order_id)
                .values(
                    customer_name=customer_name,
                    total_price=total_price,
                    total_carbon_saved=total_carbon_saved,
                )
            )
            changes = result.rowcount

            if changes:
                await self.db.execute(
                    delete(OrderItem).where(OrderItem.order_id == order_id)
                )
                self._add_items(order_id, items)
                await self.db.flush()

            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Order #{order_id} update rejected: {_storage_message(e)}")
            raise OrderStorageError(_storage_message(e)) from e

        logger.info(f"Order #{order_id} updated (changes={changes})")
        return changes

    async def delete_order(self, order_id: int) -> int:
        """
        Delete the items first, then the order row.

        Returns:
            int: rows removed by the order-row delete
        """
        if not _storable_id(order_id):
            return 0

        try:
            await self.db.execute(
                delete(OrderItem).where(OrderItem.order_id == order_id)
            )
            result = await self.db.execute(
                delete(Order).where(Order.id == order_id)
            )
            changes = result.rowcount
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Order #{order_id} delete rejected: {_storage_message(e)}")
            raise OrderStorageError(_storage_message(e)) from e

        logger.info(f"Order #{order_id} deleted (changes={changes})")
        return changes

    # =====================================================
    # HELPERS
    # =====================================================

    def _add_items(self, order_id: int, items: Sequence[OrderItemCreate]) -> None:
        self.db.add_all([
            OrderItem(
                order_id=order_id,
                item_name=item.item_name,
                unit_price=item.unit_price,
                quantity=item.quantity,
                carbon_saved=item.carbon_saved,
            )
            for item in items
        ])
