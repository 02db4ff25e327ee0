"""Simulated order placement suite with chained tasks.

Each step depends on the previous one: create an order, charge it, then
ship it.  Every step adds one labeled level to the report, so a failure
shows exactly which link of the chain broke.
"""

import asyncio
import sys

import tasktest as tt
from tasktest.run.environment import Environment

expect = tt.expect


async def create_order() -> dict:
    await asyncio.sleep(0.01)
    return {"id": "ord-1", "total": 129.97, "items": 3}


async def charge(order: dict) -> str:
    await asyncio.sleep(0.01)
    return f"txn-{order['id']}"


async def ship(order: dict) -> str:
    await asyncio.sleep(0.01)
    return "label-0001"


def _charged(order: dict):
    def build(txn: str) -> tt.DeferredTest:
        return tt.concat([
            tt.test("transaction references order", lambda: expect.equal(f"txn-{order['id']}", txn)),
            tt.await_task(
                lambda: ship(order),
                "ship",
                lambda label: tt.test("label issued", lambda: expect.ok(label.startswith("label-"))),
            ),
        ])

    return build


def _created(order: dict) -> tt.DeferredTest:
    return tt.concat([
        tt.test("three items", lambda: expect.equal(3, order["items"])),
        tt.await_task(lambda: charge(order), "charge", _charged(order)),
    ])


suite = tt.describe("order placement", [
    tt.await_task(create_order, "create order", _created),
])


def main() -> int:
    return tt.run(Environment.from_process(), suite)


if __name__ == "__main__":
    sys.exit(main())
