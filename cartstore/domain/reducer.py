"""Cart transition engine.

``reduce`` is a pure function computing the next cart state from the
current state and an action. It performs no I/O and never raises:

    items ──► increase / decrease / removeItem / clearCart / resetQuantities
      │
      ▼ calculateTotals
    amount, total

    is_loading: setLoading(True) ──► itemsLoaded | setLoading(False)
"""

from dataclasses import replace
from decimal import Decimal
from typing import Callable

from cartstore.domain.actions import (
    ACTION_REGISTRY,
    CalculateTotals,
    ClearCart,
    Decrease,
    Increase,
    ItemsLoaded,
    RemoveItem,
    ResetQuantities,
    SetLoading,
)
from cartstore.domain.base import Action
from cartstore.domain.models import CartItem, CartState, ItemId

Handler = Callable[[CartState, Action], CartState]


# ============================================================================
# Item Helpers
# ============================================================================


def _update_item(
    state: CartState,
    item_id: ItemId,
    update: Callable[[CartItem], CartItem],
) -> CartState:
    """Apply ``update`` to the matching item.

    Returns the same state object when no item matches.
    """
    if not state.has_item(item_id):
        return state
    items = tuple(update(item) if item.id == item_id else item for item in state.items)
    return replace(state, items=items)


# ============================================================================
# Transition Handlers
# ============================================================================


def _clear_cart(state: CartState, action: ClearCart) -> CartState:
    return replace(state, items=(), amount=0, total=Decimal(0))


def _remove_item(state: CartState, action: RemoveItem) -> CartState:
    if not state.has_item(action.id):
        return state
    return replace(state, items=tuple(i for i in state.items if i.id != action.id))


def _increase(state: CartState, action: Increase) -> CartState:
    return _update_item(state, action.id, lambda item: item.with_quantity(item.quantity + 1))


def _decrease(state: CartState, action: Decrease) -> CartState:
    # Lines stay in the cart at zero quantity.
    return _update_item(state, action.id, lambda item: item.with_quantity(item.quantity - 1))


def _reset_quantities(state: CartState, action: ResetQuantities) -> CartState:
    return replace(state, items=tuple(item.with_quantity(0) for item in state.items))


def _calculate_totals(state: CartState, action: CalculateTotals) -> CartState:
    amount = 0
    total = Decimal(0)
    for item in state.items:
        amount += item.quantity
        total += item.line_total
    return replace(state, amount=amount, total=total)


def _set_loading(state: CartState, action: SetLoading) -> CartState:
    return replace(state, is_loading=action.is_loading)


def _items_loaded(state: CartState, action: ItemsLoaded) -> CartState:
    return replace(state, items=action.items, is_loading=False)


# Handler table (every registered action type must have an entry)
_HANDLERS: dict[type[Action], Handler] = {
    ClearCart: _clear_cart,
    RemoveItem: _remove_item,
    Increase: _increase,
    Decrease: _decrease,
    ResetQuantities: _reset_quantities,
    CalculateTotals: _calculate_totals,
    SetLoading: _set_loading,
    ItemsLoaded: _items_loaded,
}  # type: ignore[dict-item]

_unhandled = set(ACTION_REGISTRY.values()) - set(_HANDLERS)
if _unhandled:
    raise RuntimeError(f"No reducer handler for actions: {sorted(c.__name__ for c in _unhandled)}")


# ============================================================================
# Reducer
# ============================================================================


def reduce(state: CartState, action: object) -> CartState:
    """Compute the next cart state.

    Args:
        state: Current state (never modified).
        action: Action to apply. Anything that is not a known action
            leaves the state unchanged.

    Returns:
        The next state, or ``state`` itself when nothing changes.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)  # type: ignore[arg-type]


def is_handled(action: object) -> bool:
    """Check whether the reducer has a transition for this action.

    Args:
        action: Action to check.

    Returns:
        True if ``reduce`` would act on it.
    """
    return type(action) in _HANDLERS
