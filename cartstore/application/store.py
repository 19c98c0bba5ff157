"""Cart store.

The store owns the current CartState. It is the only writer: every
change goes through ``dispatch``, which runs the reducer, swaps the
state reference and synchronously notifies subscribers.
"""

from typing import Callable, TypeVar

import structlog

from cartstore.domain.actions import UnknownAction
from cartstore.domain.base import Action
from cartstore.domain.exceptions import ReentrantDispatchError
from cartstore.domain.models import CartState
from cartstore.domain.reducer import is_handled, reduce

logger = structlog.get_logger()

T = TypeVar("T")

Listener = Callable[[], None]
Unsubscribe = Callable[[], None]
Reducer = Callable[[CartState, object], CartState]


def _action_name(action: object) -> str:
    if isinstance(action, UnknownAction):
        return action.name
    if isinstance(action, Action):
        return action.action_type
    return type(action).__name__


class CartStore:
    """Single owner of the cart state.

    Consumers read through ``get_state`` / ``select`` and request
    changes through ``dispatch``. States handed out are frozen, so
    readers cannot modify what the store holds.
    """

    def __init__(
        self,
        initial_state: CartState | None = None,
        reducer: Reducer = reduce,
    ) -> None:
        """Initialize the store.

        Args:
            initial_state: Starting state. Defaults to ``CartState.initial()``.
            reducer: Transition function.
        """
        self._state = initial_state if initial_state is not None else CartState.initial()
        self._reducer = reducer
        self._listeners: list[Listener] = []
        self._is_dispatching = False

    def get_state(self) -> CartState:
        """Get the current state snapshot."""
        return self._state

    def select(self, selector: Callable[[CartState], T]) -> T:
        """Apply a selector to the current state.

        Args:
            selector: Projection over CartState.

        Returns:
            Whatever the selector returns.
        """
        return selector(self._state)

    def dispatch(self, action: object) -> CartState:
        """Apply an action and notify subscribers.

        Unrecognised actions leave the state unchanged; subscribers are
        still notified.

        Args:
            action: Action to apply.

        Returns:
            The new current state.

        Raises:
            ReentrantDispatchError: If called while the reducer is running.
        """
        name = _action_name(action)
        if self._is_dispatching:
            raise ReentrantDispatchError(name)

        if not is_handled(action):
            logger.debug("Ignoring unrecognised action", action_type=name)

        try:
            self._is_dispatching = True
            self._state = self._reducer(self._state, action)
        finally:
            self._is_dispatching = False

        logger.debug(
            "Dispatched action",
            action_type=name,
            item_count=len(self._state.items),
            is_loading=self._state.is_loading,
        )
        self._notify()
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register a listener called after every dispatch.

        Args:
            listener: Zero-argument callable.

        Returns:
            Callable that removes the listener. Calling it more than
            once has no further effect.
        """
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _notify(self) -> None:
        # Listeners added or removed during this round take effect next round.
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Cart store listener failed", listener=repr(listener))
