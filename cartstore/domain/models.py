"""Cart value types.

CartItem describes one product line; CartState is the cart aggregate
held by the store. Both are frozen: transitions build new values and
share unchanged items with the previous state.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Self

from cartstore.domain.base import ValueObject
from cartstore.domain.exceptions import DuplicateCartItemError, InvalidCartItemError

# Remote sources use both numeric and string ids.
ItemId = str | int


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a numeric value to Decimal without float artefacts.

    Args:
        value: Number or numeric string.

    Returns:
        Decimal representation.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


# ============================================================================
# Cart Item
# ============================================================================


@dataclass(frozen=True)
class CartItem(ValueObject):
    """One product line in the cart.

    Attributes:
        id: Identifier, unique within a cart.
        title: Display label.
        price: Unit price, never negative.
        quantity: Number of units, never negative.
        img: Optional image URL.
    """

    id: ItemId
    title: str
    price: Decimal
    quantity: int = 1
    img: str | None = None

    def __post_init__(self) -> None:
        """Validate item constraints and normalize price."""
        try:
            price = to_decimal(self.price)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidCartItemError(self.id, "price", self.price) from None
        if not price.is_finite() or price < 0:
            raise InvalidCartItemError(self.id, "price", self.price)
        object.__setattr__(self, "price", price)
        # bool is an int subclass but not a quantity
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise InvalidCartItemError(self.id, "quantity", self.quantity)
        if self.quantity < 0:
            raise InvalidCartItemError(self.id, "quantity", self.quantity)

    @property
    def line_total(self) -> Decimal:
        """Price multiplied by quantity."""
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "CartItem":
        """Return a copy with a new quantity, floored at zero.

        Args:
            quantity: Requested quantity.

        Returns:
            New CartItem.
        """
        return replace(self, quantity=max(quantity, 0))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price),
            "quantity": self.quantity,
            "img": self.img,
        }


# ============================================================================
# Cart State
# ============================================================================


@dataclass(frozen=True)
class CartState(ValueObject):
    """The cart aggregate.

    ``amount`` and ``total`` are derived fields. They are only guaranteed
    to match ``items`` right after a totals recalculation.

    Attributes:
        items: Ordered line items, unique by id.
        amount: Sum of item quantities.
        total: Sum of price times quantity.
        is_loading: True while the initial load is outstanding.
    """

    items: tuple[CartItem, ...] = field(default_factory=tuple)
    amount: int = 0
    total: Decimal = Decimal(0)
    is_loading: bool = False

    def __post_init__(self) -> None:
        """Freeze the item sequence and reject duplicate ids."""
        items = tuple(self.items)
        seen: set[ItemId] = set()
        for item in items:
            if item.id in seen:
                raise DuplicateCartItemError(item.id)
            seen.add(item.id)
        object.__setattr__(self, "items", items)
        object.__setattr__(self, "total", to_decimal(self.total))

    @classmethod
    def initial(cls) -> Self:
        """State the store starts with: empty and loading.

        Returns:
            Initial CartState.
        """
        return cls(items=(), amount=0, total=Decimal(0), is_loading=True)

    @classmethod
    def from_items(cls, items: Iterable[CartItem], is_loading: bool = False) -> Self:
        """Build a state from items with totals already computed.

        Args:
            items: Line items.
            is_loading: Loading flag.

        Returns:
            CartState with consistent totals.
        """
        items = tuple(items)
        return cls(
            items=items,
            amount=sum(item.quantity for item in items),
            total=sum((item.line_total for item in items), Decimal(0)),
            is_loading=is_loading,
        )

    @property
    def is_empty(self) -> bool:
        """True if the cart has no line items."""
        return len(self.items) == 0

    def get_item(self, item_id: ItemId) -> CartItem | None:
        """Find item by ID.

        Args:
            item_id: Item identifier.

        Returns:
            CartItem if found, None otherwise.
        """
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def has_item(self, item_id: ItemId) -> bool:
        return self.get_item(item_id) is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert state to a JSON-friendly dictionary."""
        return {
            "items": [item.to_dict() for item in self.items],
            "amount": self.amount,
            "total": str(self.total),
            "is_loading": self.is_loading,
        }
