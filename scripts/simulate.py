"""
Load Simulation Script

Fires concurrent order and prompt traffic at a running server
to check that the API holds up under parallel requests.
Run from project root: python scripts/simulate.py
"""

import argparse
import asyncio
import random
import sys
import time
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:5000"
TOTAL_ORDERS = 50

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]
CATALOG = [
    {"itemName": "Bamboo Toothbrush", "unitPrice": 4.50, "carbonSaved": 0.30},
    {"itemName": "Reusable Coffee Cup", "unitPrice": 12.00, "carbonSaved": 1.20},
    {"itemName": "Organic Cotton Tote", "unitPrice": 8.99, "carbonSaved": 0.85},
    {"itemName": "Refurbished Phone", "unitPrice": 249.00, "carbonSaved": 42.00},
    {"itemName": "Solar Power Bank", "unitPrice": 35.50, "carbonSaved": 3.10},
    {"itemName": "Beeswax Wraps", "unitPrice": 15.00, "carbonSaved": 0.60},
    {"itemName": "Steel Water Bottle", "unitPrice": 19.99, "carbonSaved": 2.40},
]
PROMPTS = [
    "Estimate the carbon footprint of a cotton t-shirt in kgCO2e. Reply with a number only.",
    "Give three suggestions to reduce carbon footprint for this order: coffee cup, tote bag.",
    "Which of these products is the most sustainable choice?",
]


def generate_random_items() -> list[dict]:
    """Pick 1-4 catalog items with random quantities."""
    items = []
    for _ in range(random.randint(1, 4)):
        item = random.choice(CATALOG).copy()
        item["quantity"] = random.randint(1, 3)
        items.append(item)
    return items


def generate_order_payload() -> dict[str, Any]:
    """Generate payload for POST /api/orders."""
    items = generate_random_items()
    return {
        "customerName": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        "items": items,
        "totalPrice": round(sum(i["unitPrice"] * i["quantity"] for i in items), 2),
        "totalCarbonSaved": round(sum(i["carbonSaved"] * i["quantity"] for i in items), 2),
    }


async def send_order(client: httpx.AsyncClient, order_num: int) -> dict[str, Any]:
    """Create one order and read it back."""
    payload = generate_order_payload()
    start_time = time.time()

    try:
        response = await client.post(f"{API_BASE_URL}/api/orders", json=payload, timeout=30.0)
        if response.status_code != 200:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": round(time.time() - start_time, 3),
                "mode": "order",
            }

        order = response.json()["data"]
        check = await client.get(f"{API_BASE_URL}/api/orders/{order['id']}", timeout=30.0)
        stored = check.json().get("data") or {}
        consistent = len(stored.get("items", [])) == len(payload["items"])

        return {
            "order_num": order_num,
            "success": consistent,
            "order_id": order["id"],
            "total": order["totalPrice"],
            "carbon": order["totalCarbonSaved"],
            "error": None if consistent else "item count mismatch on read-back",
            "time": round(time.time() - start_time, 3),
            "mode": "order",
        }
    except Exception as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
            "mode": "order",
        }


async def send_prompt(client: httpx.AsyncClient, order_num: int) -> dict[str, Any]:
    """Send one prompt to the AI proxy."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/api/prompts",
            json={"prompt": random.choice(PROMPTS)},
            timeout=60.0,
        )
        elapsed = round(time.time() - start_time, 3)
        body = response.json()
        return {
            "order_num": order_num,
            "success": response.status_code == 200,
            "error": body.get("error"),
            "time": elapsed,
            "mode": "prompt",
        }
    except Exception as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
            "mode": "prompt",
        }


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(mode: str = "both", num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the concurrent simulation.

    Args:
        mode: "orders", "prompts", or "both"
        num_orders: Number of requests to fire
    """
    print("=" * 70)
    print("🔥 LOAD SIMULATION - CONCURRENT REQUESTS")
    print("=" * 70)
    print(f"📋 Total Requests: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🔧 Mode: {mode}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        tasks = []
        for i in range(num_orders):
            if mode == "orders" or (mode == "both" and i % 2 == 0):
                tasks.append(send_order(client, i + 1))
            else:
                tasks.append(send_prompt(client, i + 1))
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    orders = [r for r in successful if r["mode"] == "order"]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful: {len(successful)}/{num_orders}")
    print(f"❌ Failed: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")

    if orders:
        print(f"   💰 Total Revenue: ${sum(r['total'] for r in orders):.2f}")
        print(f"   🌱 Carbon Saved: {sum(r['carbon'] for r in orders):.2f} kgCO2e")

    if failed:
        print(f"\n⚠️  Failed Request Details (showing first 5):")
        for f in failed[:5]:
            print(f"   #{f['order_num']} [{f['mode']}]: {f.get('error') or 'Unknown error'}")

    print("\n" + "=" * 70)
    print("🔍 Next: python scripts/verify.py to check database integrity")
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_health() -> bool:
    """Pre-flight health check."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/api/health")
        except httpx.HTTPError as e:
            print(f"   ❌ Server unreachable: {e}")
            return False

    if response.status_code != 200:
        print(f"   ❌ Failed: {response.text}")
        return False

    data = response.json()
    print(f"   ✅ Status: {data.get('status')}")
    print(f"   AI key configured: {data.get('hasApiKey')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load Simulation Script")
    parser.add_argument("--orders-only", action="store_true", help="Only create orders")
    parser.add_argument("--prompts-only", action="store_true", help="Only send prompts")
    parser.add_argument("--requests", type=int, default=TOTAL_ORDERS, help="Number of requests")
    parser.add_argument("--base-url", default=API_BASE_URL, help="Server base URL")
    args = parser.parse_args()

    API_BASE_URL = args.base_url.rstrip("/")

    if args.orders_only:
        mode = "orders"
    elif args.prompts_only:
        mode = "prompts"
    else:
        mode = "both"

    print("\n1️⃣ Health Check...")
    if not asyncio.run(check_health()):
        print("\n❌ Pre-flight check failed. Is the server running?")
        sys.exit(1)

    asyncio.run(run_simulation(mode, args.requests))
