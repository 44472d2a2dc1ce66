"""
Service Simulation Script

Simulates a busy service against a running server: waiters firing
orders, the cashier marking them paid and the storeroom adjusting stock.
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
API_BASE_URL = "http://localhost:3000"
TOTAL_ORDERS = 50

# Sample data
WAITERS = ["Luca", "Giulia", "Marco", "Sara", "Paolo", "Chiara"]
AREAS = ["sala", "pizzeria", "bar"]
STOCK = [
    {"name": "Farina", "unit": "kg", "quantity": 50},
    {"name": "Mozzarella", "unit": "kg", "quantity": 20},
    {"name": "Pomodoro", "unit": "kg", "quantity": 30},
    {"name": "Birra", "unit": "l", "quantity": 80},
]


def generate_order_payload() -> dict[str, Any]:
    """Generate a random table order."""
    return {
        "table": random.randint(1, 30),
        "covers": random.randint(1, 8),
        "area": random.choice(AREAS),
        "waiter": random.choice(WAITERS),
    }


async def send_order(client: httpx.AsyncClient, order_num: int) -> dict[str, Any]:
    """Create an order and, half of the time, mark it paid."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/orders",
            json=generate_order_payload(),
            timeout=30.0,
        )
        if response.status_code != 201:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": round(time.time() - start_time, 3),
            }

        order = response.json()
        paid = False
        if random.random() < 0.5:
            paid_response = await client.patch(
                f"{API_BASE_URL}/orders/{order['id']}/paid",
                json={"paid": True},
                timeout=30.0,
            )
            paid = paid_response.status_code == 200

        return {
            "order_num": order_num,
            "success": True,
            "order_id": order["id"],
            "paid": paid,
            "time": round(time.time() - start_time, 3),
        }
    except httpx.HTTPError as e:
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


async def adjust_stock(client: httpx.AsyncClient, item_ids: list[int]) -> int:
    """Consume random amounts from stock; returns the number of successful adjustments."""
    requests = [
        client.patch(
            f"{API_BASE_URL}/inventory/{random.choice(item_ids)}/adjust",
            json={"delta": -random.randint(1, 3)},
            timeout=30.0,
        )
        for _ in range(len(item_ids) * 5)
    ]
    responses = await asyncio.gather(*requests, return_exceptions=True)
    return sum(1 for r in responses if isinstance(r, httpx.Response) and r.status_code == 200)


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the simulation.

    Args:
        num_orders: Number of orders to simulate
    """
    print("=" * 70)
    print("🔥 SERVICE SIMULATION")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        print("\n🚀 Firing orders...\n")
        results = await asyncio.gather(*[send_order(client, i + 1) for i in range(num_orders)])

        print("📦 Stocking storeroom...\n")
        item_ids = []
        for item in STOCK:
            response = await client.post(f"{API_BASE_URL}/inventory", json=item)
            if response.status_code == 201:
                item_ids.append(response.json()["id"])

        adjustments = await adjust_stock(client, item_ids) if item_ids else 0

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Orders: {len(successful)}/{num_orders}")
    print(f"❌ Failed Orders: {len(failed)}/{num_orders}")
    print(f"💳 Marked Paid: {len([r for r in successful if r['paid']])}")
    print(f"📦 Stock Adjustments: {adjustments}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        ids = [r["order_id"] for r in successful]
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Response: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   Unique IDs: {len(set(ids))}/{len(ids)}")

    if failed:
        print(f"\n⚠️  Failed Order Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)
    print("🔍 VERIFICATION STEPS")
    print("=" * 70)
    print("1. Run: python scripts/verify.py")
    print(f"2. Visit {API_BASE_URL}/cassa to see the orders")
    print("=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def preflight_checks() -> bool:
    """Check the server responds before firing the simulation."""
    print("\n" + "=" * 70)
    print("🧪 PRE-FLIGHT CHECKS")
    print("=" * 70)

    async with httpx.AsyncClient() as client:
        print("\n1️⃣ Health Check...")
        try:
            response = await client.get(f"{API_BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"   ❌ Server unreachable: {e}")
            return False
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        print(f"   ✅ {response.text}")

        print("\n2️⃣ Order Listing...")
        response = await client.get(f"{API_BASE_URL}/orders")
        if response.status_code != 200:
            print(f"   ❌ Failed: {response.text}")
            return False
        print(f"   ✅ {len(response.json())} existing orders")

    print("\n" + "=" * 70)
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Service Simulation Script")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--skip-checks", action="store_true", help="Skip pre-flight checks")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    if not args.skip_checks:
        if not asyncio.run(preflight_checks()):
            print("\n❌ Pre-flight checks failed. Is the server running?")
            sys.exit(1)
        print("\n✅ Pre-flight checks passed!")

    asyncio.run(run_simulation(num_orders=args.orders))
