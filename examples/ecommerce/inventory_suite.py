"""Simulated inventory suite.

Shows a test group that depends on an asynchronous inventory query,
with assertions and a fuzz test built from the query result.

Run with ``tasktest examples.ecommerce.inventory_suite:suite`` or
directly with ``python examples/ecommerce/inventory_suite.py``.
"""

import asyncio
import sys

import tasktest as tt
from tasktest.run.environment import Environment

expect = tt.expect


async def query_inventory() -> dict[str, int]:
    await asyncio.sleep(0.01)
    return {"SKU-001": 150, "SKU-002": 0, "SKU-003": 12}


async def reserve(sku: str, quantity: int) -> int:
    await asyncio.sleep(0.01)
    if quantity <= 0:
        raise tt.TaskError(f"invalid quantity {quantity}")
    return quantity


def _levels(stock: dict[str, int]) -> tt.DeferredTest:
    return tt.concat([
        tt.test("SKU-001 in stock", lambda: expect.ok(stock["SKU-001"] > 0)),
        tt.test("SKU-002 sold out", lambda: expect.equal(0, stock["SKU-002"])),
        tt.fuzz(
            lambda rng: rng.choice(sorted(stock)),
            "levels are never negative",
            lambda sku: expect.ok(stock[sku] >= 0),
        ),
    ])


suite = tt.describe("inventory", [
    tt.await_task(query_inventory, "query inventory", _levels),
    tt.await_task(
        lambda: reserve("SKU-003", 2),
        "reserve two",
        lambda reserved: tt.test("reserved 2", lambda: expect.equal(2, reserved)),
    ),
    tt.await_error(
        lambda: reserve("SKU-003", 0),
        "reserve zero",
        lambda error: tt.test(
            "rejected", lambda: expect.equal("invalid quantity 0", error)
        ),
    ),
])


def main() -> int:
    return tt.run(Environment.from_process(), suite)


if __name__ == "__main__":
    sys.exit(main())
