"""
Database Verification Script

Checks data integrity of the SQLite store after a simulation.
Run from project root: python scripts/verify.py
"""

import asyncio
import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, select

from carbon_trace.core.config import get_settings
from carbon_trace.database import create_engine, create_session_maker
from carbon_trace.models import Order, OrderItem


async def verify_database() -> bool:
    """Report counts, orphaned items and totals that disagree with their items."""
    settings = get_settings()

    print("=" * 60)
    print("🔍 DATABASE VERIFICATION REPORT")
    print("=" * 60)
    print(f"⏰ Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"📄 Database: {settings.database_url}")
    print("=" * 60)

    engine = create_engine(settings.database_url)
    session_maker = create_session_maker(engine)
    healthy = True

    try:
        async with session_maker() as db:
            order_count = (await db.execute(select(func.count(Order.id)))).scalar() or 0
            item_count = (await db.execute(select(func.count(OrderItem.id)))).scalar() or 0

            print(f"\n📊 STATISTICS:")
            print(f"   Orders: {order_count}")
            print(f"   Order items: {item_count}")

            orphans = (
                await db.execute(
                    select(func.count(OrderItem.id)).where(
                        ~select(Order.id).where(Order.id == OrderItem.order_id).exists()
                    )
                )
            ).scalar() or 0

            if orphans:
                healthy = False
                print(f"\n⚠️ {orphans} order item(s) without a parent order!")
            else:
                print(f"\n✅ No orphaned order items")

            orders = (await db.execute(select(Order).order_by(Order.id))).scalars().all()
            mismatched = [
                order for order in orders
                if order.items and abs(
                    sum(i.unit_price * i.quantity for i in order.items) - order.total_price
                ) > 0.01
            ]

            if mismatched:
                print(f"⚠️ {len(mismatched)} order(s) whose totalPrice differs from their items")
                for order in mismatched[:5]:
                    print(f"   {order!r}")
            else:
                print(f"✅ Order totals match their items")

            if orders:
                revenue = sum(o.total_price for o in orders)
                carbon = sum(o.total_carbon_saved for o in orders)
                print(f"\n💰 REVENUE: ${revenue:.2f} (avg ${revenue / len(orders):.2f})")
                print(f"🌱 CARBON SAVED: {carbon:.2f} kgCO2e")
    except Exception as e:
        print(f"\n❌ Could not read database: {e}")
        return False
    finally:
        await engine.dispose()

    print("\n" + "=" * 60)
    print("✅ VERIFICATION COMPLETE" if healthy else "❌ VERIFICATION FOUND PROBLEMS")
    print("=" * 60)

    return healthy


if __name__ == "__main__":
    sys.exit(0 if asyncio.run(verify_database()) else 1)
