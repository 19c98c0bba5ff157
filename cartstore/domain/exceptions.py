"""Domain exceptions.

Errors raised when cart invariants are violated or the store is misused.
Transitions themselves never raise: missing ids, unknown actions and
negative quantities are absorbed by the reducer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all cartstore exceptions.

    All errors should inherit from this class to allow catching
    cartstore-specific errors at the application boundary.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Model Errors
# ============================================================================


class CartItemError(DomainError):
    """Base class for cart item errors."""

    pass


class InvalidCartItemError(CartItemError):
    """Raised when a cart item is built with an invalid price or quantity."""

    def __init__(self, item_id: object, field: str, value: object) -> None:
        """Initialize invalid cart item error.

        Args:
            item_id: ID of the offending item.
            field: Name of the invalid field.
            value: The rejected value.
        """
        super().__init__(
            f"Cart item {item_id!r} has invalid {field}: {value!r}",
            details={"item_id": item_id, "field": field, "value": value},
        )


class DuplicateCartItemError(CartItemError):
    """Raised when a cart state would contain two items with the same id."""

    def __init__(self, item_id: object) -> None:
        """Initialize duplicate cart item error.

        Args:
            item_id: The id that appears more than once.
        """
        super().__init__(
            f"Cart already contains an item with id {item_id!r}",
            details={"item_id": item_id},
        )


# ============================================================================
# Action Errors
# ============================================================================


class InvalidActionError(DomainError):
    """Raised when a serialized action of a known type has a bad payload."""

    def __init__(self, action_type: str, reason: str) -> None:
        """Initialize invalid action error.

        Args:
            action_type: Wire name of the action.
            reason: What was wrong with the payload.
        """
        super().__init__(
            f"Invalid payload for action '{action_type}': {reason}",
            details={"action_type": action_type, "reason": reason},
        )


# ============================================================================
# Store Errors
# ============================================================================


class ReentrantDispatchError(DomainError):
    """Raised when dispatch is called while a reducer is running."""

    def __init__(self, action_type: str) -> None:
        super().__init__(
            f"Cannot dispatch '{action_type}' while a reducer is running",
            details={"action_type": action_type},
        )
