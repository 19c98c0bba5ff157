"""Base classes for domain layer.

Provides the foundational abstractions for cart value types and
the actions that drive cart transitions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar


# ============================================================================
# Value Object Base
# ============================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. Cart items and cart states are value objects:
    every transition produces a new one instead of mutating the old.

    Example:
        @dataclass(frozen=True)
        class CartItem(ValueObject):
            id: str
            quantity: int
    """

    pass


# ============================================================================
# Action Base
# ============================================================================


@dataclass(frozen=True)
class Action(ABC):
    """Base class for actions.

    An action is an immutable description of a requested state
    transition. Each concrete action declares a wire name used when
    actions are serialized to plain dictionaries.

    Attributes:
        action_type: String identifier for the action (set by subclass).
    """

    action_type: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert action to dictionary for serialization.

        Returns:
            Dictionary with ``type`` and ``payload`` keys.
        """
        return {
            "type": self.action_type,
            "payload": self._payload(),
        }

    @abstractmethod
    def _payload(self) -> dict[str, Any]:
        """Get action-specific payload data.

        Returns:
            Dictionary with action-specific data.
        """
        pass
