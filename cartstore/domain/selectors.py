"""Read-only projections over cart state.

Consumers read the cart through these functions instead of reaching
into the state directly, e.g. ``store.select(select_total)``.
"""

from decimal import Decimal
from typing import Callable

from cartstore.domain.models import CartItem, CartState, ItemId


def select_cart(state: CartState) -> CartState:
    return state


def select_items(state: CartState) -> tuple[CartItem, ...]:
    return state.items


def select_amount(state: CartState) -> int:
    return state.amount


def select_total(state: CartState) -> Decimal:
    return state.total


def select_is_loading(state: CartState) -> bool:
    return state.is_loading


def select_is_empty(state: CartState) -> bool:
    """True once loading is done and the cart has no items."""
    return not state.is_loading and state.is_empty


def select_item(item_id: ItemId) -> Callable[[CartState], CartItem | None]:
    """Build a selector for a single item.

    Args:
        item_id: Item identifier.

    Returns:
        Selector returning the item, or None if it is not in the cart.
    """

    def selector(state: CartState) -> CartItem | None:
        return state.get_item(item_id)

    return selector
