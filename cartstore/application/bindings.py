"""Store bindings that react to state changes.

These are the effects a cart view wires up around the store: keeping
totals in step with the items, and zeroing quantities once the initial
load has finished.
"""

import structlog

from cartstore.application.store import CartStore, Unsubscribe
from cartstore.domain.actions import CalculateTotals, ResetQuantities

logger = structlog.get_logger()


def bind_totals(store: CartStore) -> Unsubscribe:
    """Recalculate totals whenever the items change.

    Totals are computed once immediately. After that, any dispatch that
    replaces the items tuple triggers a ``CalculateTotals``.

    Args:
        store: Store to watch.

    Returns:
        Callable that removes the binding.
    """
    last_items = store.get_state().items

    def on_change() -> None:
        nonlocal last_items
        items = store.get_state().items
        if items is last_items:
            return
        last_items = items
        store.dispatch(CalculateTotals())

    unsubscribe = store.subscribe(on_change)
    store.dispatch(CalculateTotals())
    return unsubscribe


def bind_reset_after_load(store: CartStore) -> Unsubscribe:
    """Zero every quantity when a load finishes with a non-empty cart.

    Fires once per completed load, on the change of ``is_loading`` from
    True to False.

    Args:
        store: Store to watch.

    Returns:
        Callable that removes the binding.
    """
    was_loading = store.get_state().is_loading

    def on_change() -> None:
        nonlocal was_loading
        state = store.get_state()
        finished = was_loading and not state.is_loading
        was_loading = state.is_loading
        if finished and not state.is_empty:
            logger.debug("Resetting quantities after load", item_count=len(state.items))
            store.dispatch(ResetQuantities())

    return store.subscribe(on_change)
