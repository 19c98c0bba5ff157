"""Cart actions.

Actions are the complete vocabulary of requested cart transitions.
They are used for:
- Driving the reducer through the store
- Serializing requests from consumers as plain dictionaries
- Logging what happened to the cart
"""

from dataclasses import dataclass, field
from decimal import InvalidOperation
from typing import Any, ClassVar

from cartstore.domain.base import Action
from cartstore.domain.exceptions import (
    DomainError,
    DuplicateCartItemError,
    InvalidActionError,
)
from cartstore.domain.models import CartItem, ItemId


# ============================================================================
# Item Actions
# ============================================================================


@dataclass(frozen=True)
class ClearCart(Action):
    """Remove every item from the cart."""

    action_type: ClassVar[str] = "cart/clearCart"

    def _payload(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class RemoveItem(Action):
    """Remove the item with the given id."""

    action_type: ClassVar[str] = "cart/removeItem"

    id: ItemId

    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload."""
        return {"id": self.id}


@dataclass(frozen=True)
class Increase(Action):
    """Add one unit to the item with the given id."""

    action_type: ClassVar[str] = "cart/increase"

    id: ItemId

    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload."""
        return {"id": self.id}


@dataclass(frozen=True)
class Decrease(Action):
    """Take one unit from the item with the given id, never below zero."""

    action_type: ClassVar[str] = "cart/decrease"

    id: ItemId

    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload."""
        return {"id": self.id}


@dataclass(frozen=True)
class ResetQuantities(Action):
    """Set every item's quantity to zero, keeping the lines."""

    action_type: ClassVar[str] = "cart/resetQuantities"

    def _payload(self) -> dict[str, Any]:
        return {}


# ============================================================================
# Totals Actions
# ============================================================================


@dataclass(frozen=True)
class CalculateTotals(Action):
    """Recompute amount and total from the items."""

    action_type: ClassVar[str] = "cart/calculateTotals"

    def _payload(self) -> dict[str, Any]:
        return {}


# ============================================================================
# Loading Lifecycle Actions
# ============================================================================


@dataclass(frozen=True)
class SetLoading(Action):
    """Set the loading flag."""

    action_type: ClassVar[str] = "cart/setLoading"

    is_loading: bool

    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload."""
        return {"is_loading": self.is_loading}


@dataclass(frozen=True)
class ItemsLoaded(Action):
    """Replace the items with a freshly loaded set and stop loading."""

    action_type: ClassVar[str] = "cart/itemsLoaded"

    items: tuple[CartItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Freeze the item sequence and reject duplicate ids."""
        items = tuple(self.items)
        seen: set[ItemId] = set()
        for item in items:
            if item.id in seen:
                raise DuplicateCartItemError(item.id)
            seen.add(item.id)
        object.__setattr__(self, "items", items)

    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload."""
        return {"items": [item.to_dict() for item in self.items]}


# ============================================================================
# Unknown Actions
# ============================================================================


@dataclass(frozen=True)
class UnknownAction(Action):
    """An action whose wire name is not part of the vocabulary.

    The reducer ignores it. It exists so that serialized actions from
    newer producers can still be dispatched without error.
    """

    action_type: ClassVar[str] = "cart/unknown"

    name: str = ""
    payload: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.name, "payload": dict(self.payload)}

    def _payload(self) -> dict[str, Any]:
        return dict(self.payload)


# ============================================================================
# Action Registry
# ============================================================================


# Registry of all known action types for deserialization
ACTION_REGISTRY: dict[str, type[Action]] = {
    ClearCart.action_type: ClearCart,
    RemoveItem.action_type: RemoveItem,
    Increase.action_type: Increase,
    Decrease.action_type: Decrease,
    ResetQuantities.action_type: ResetQuantities,
    CalculateTotals.action_type: CalculateTotals,
    SetLoading.action_type: SetLoading,
    ItemsLoaded.action_type: ItemsLoaded,
}


def get_action_class(action_type: str) -> type[Action] | None:
    """Get action class by type name.

    Args:
        action_type: Action type string (e.g., "cart/increase").

    Returns:
        Action class if found, None otherwise.
    """
    return ACTION_REGISTRY.get(action_type)


def action_from_dict(data: dict[str, Any]) -> Action:
    """Rebuild an action from its dictionary form.

    Args:
        data: Dictionary with ``type`` and optional ``payload`` keys.

    Returns:
        The matching Action, or UnknownAction for unrecognised types.

    Raises:
        InvalidActionError: If a known action has a malformed payload.
    """
    action_type = str(data.get("type", ""))
    payload = data.get("payload") or {}
    action_class = get_action_class(action_type)
    if action_class is None:
        return UnknownAction(
            name=action_type,
            payload=dict(payload) if isinstance(payload, dict) else {},
        )

    if not isinstance(payload, dict):
        raise InvalidActionError(action_type, "payload must be an object")

    try:
        if action_class is ItemsLoaded:
            return ItemsLoaded(
                items=tuple(CartItem(**item) for item in payload.get("items", []))
            )
        if action_class is SetLoading:
            is_loading = payload["is_loading"]
            if not isinstance(is_loading, bool):
                raise InvalidActionError(action_type, "is_loading must be a boolean")
            return SetLoading(is_loading=is_loading)
        if action_class in (RemoveItem, Increase, Decrease):
            return action_class(id=payload["id"])
        return action_class()
    except InvalidActionError:
        raise
    except KeyError as e:
        raise InvalidActionError(action_type, f"missing field {e.args[0]!r}") from e
    except (TypeError, InvalidOperation, DomainError) as e:
        raise InvalidActionError(action_type, str(e)) from e
