"""
SQLAlchemy Database Models

Two tables:
- orders: one row per customer purchase with price and carbon totals
- order_items: line items, each pointing at exactly one order

Column names on disk are camelCase so databases created by earlier
releases of the service keep working.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Text,
    TypeDecorator,
)
from sqlalchemy.orm import relationship

from carbon_trace.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timestamp stored as naive UTC and loaded back as aware UTC.

    SQLite keeps no offset, so values are normalised on the way in
    and tagged on the way out.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Order(Base):
    """
    Main Order table - stores a purchase and its aggregate totals.

    Items are always loaded together with the order (selectin).
    No ORM or database cascade; the repository removes items
    before the parent row.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)

    customer_name = Column("customerName", Text, nullable=False)
    total_price = Column("totalPrice", Float, nullable=False)
    total_carbon_saved = Column("totalCarbonSaved", Float, nullable=False)

    # Set once on insert, never part of an UPDATE
    timestamp = Column(UTCDateTime(), nullable=False, default=_utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        CheckConstraint("length(customerName) > 0", name="ck_orders_customer_name"),
        CheckConstraint("totalPrice >= 0", name="ck_orders_total_price"),
    )

    def __repr__(self):
        return f"<Order #{self.id} - {self.customer_name} - {self.total_price}>"


class OrderItem(Base):
    """Single line item belonging to one order."""
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column("orderId", Integer, ForeignKey("orders.id"), nullable=False, index=True)

    item_name = Column("itemName", Text, nullable=False)
    unit_price = Column("unitPrice", Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    carbon_saved = Column("carbonSaved", Float, nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("length(itemName) > 0", name="ck_order_items_item_name"),
        CheckConstraint("unitPrice >= 0", name="ck_order_items_unit_price"),
        CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
    )

    def __repr__(self):
        return f"<OrderItem #{self.id} - order {self.order_id} - {self.item_name} x{self.quantity}>"
