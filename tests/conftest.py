"""Pytest configuration and fixtures for cartstore tests."""

import asyncio
from decimal import Decimal

import pytest

from cartstore.application.store import CartStore
from cartstore.domain import CartItem, CartState
from cartstore.domain.exceptions import DomainError
from cartstore.infrastructure.cart_client import CartSourceError


def make_item(
    item_id: int | str = 1,
    title: str = "Shoe",
    price: int | str | Decimal = 50,
    quantity: int = 2,
) -> CartItem:
    """Create a test cart item."""
    return CartItem(id=item_id, title=title, price=price, quantity=quantity)


@pytest.fixture
def shoe() -> CartItem:
    return make_item(1, "Shoe", 50, 2)


@pytest.fixture
def hat() -> CartItem:
    return make_item(2, "Hat", 20, 1)


@pytest.fixture
def cart_state(shoe: CartItem, hat: CartItem) -> CartState:
    """Loaded cart with a shoe and a hat, totals not yet calculated."""
    return CartState(items=(shoe, hat), is_loading=False)


@pytest.fixture
def store(cart_state: CartState) -> CartStore:
    """Store seeded with the shoe and hat cart."""
    return CartStore(initial_state=cart_state)


class FakeSource:
    """In-memory cart item source.

    Returns ``items`` or raises ``error``. When ``gate`` is set, the
    fetch waits on it first so tests can control completion order.
    """

    def __init__(
        self,
        items: list[CartItem] | None = None,
        error: DomainError | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.items = items or []
        self.error = error
        self.gate = gate
        self.calls = 0

    async def fetch_cart_items(self) -> list[CartItem]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture
def bag_source() -> FakeSource:
    return FakeSource(items=[make_item(9, "Bag", 30, 1)])


@pytest.fixture
def failing_source() -> FakeSource:
    return FakeSource(error=CartSourceError("http://cart.test", "Request failed: boom"))


@pytest.fixture
def source_factory() -> type[FakeSource]:
    """Give tests access to FakeSource for custom setups."""
    return FakeSource
