"""Domain layer - Cart value types, actions, reducer, selectors.

This module exports the core building blocks of the cart:

- **Value Objects**: Immutable cart data (CartItem, CartState)
- **Actions**: The closed vocabulary of cart transitions
- **Reducer**: Pure ``reduce(state, action)`` transition engine
- **Selectors**: Read-only projections for consumers
- **Exceptions**: Invariant violations and misuse errors

Example usage:
    from cartstore.domain import CartItem, CartState, Increase, CalculateTotals, reduce

    state = CartState.from_items([CartItem(id=1, title="Shoe", price=50, quantity=2)])
    state = reduce(state, Increase(id=1))
    state = reduce(state, CalculateTotals())
    print(state.amount, state.total)  # 3 150
"""

# Base classes
from cartstore.domain.base import Action, ValueObject

# Actions
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
    UnknownAction,
    action_from_dict,
    get_action_class,
)

# Exceptions
from cartstore.domain.exceptions import (
    CartItemError,
    DomainError,
    DuplicateCartItemError,
    InvalidActionError,
    InvalidCartItemError,
    ReentrantDispatchError,
)

# Models
from cartstore.domain.models import CartItem, CartState, ItemId

# Reducer
from cartstore.domain.reducer import is_handled, reduce

# Selectors
from cartstore.domain.selectors import (
    select_amount,
    select_cart,
    select_is_empty,
    select_is_loading,
    select_item,
    select_items,
    select_total,
)

__all__ = [
    # Base classes
    "Action",
    "ValueObject",
    # Models
    "CartItem",
    "CartState",
    "ItemId",
    # Actions
    "CalculateTotals",
    "ClearCart",
    "Decrease",
    "Increase",
    "ItemsLoaded",
    "RemoveItem",
    "ResetQuantities",
    "SetLoading",
    "UnknownAction",
    # Action utilities
    "ACTION_REGISTRY",
    "action_from_dict",
    "get_action_class",
    # Reducer
    "reduce",
    "is_handled",
    # Selectors
    "select_amount",
    "select_cart",
    "select_is_empty",
    "select_is_loading",
    "select_item",
    "select_items",
    "select_total",
    # Exceptions
    "DomainError",
    "CartItemError",
    "InvalidCartItemError",
    "DuplicateCartItemError",
    "InvalidActionError",
    "ReentrantDispatchError",
]
