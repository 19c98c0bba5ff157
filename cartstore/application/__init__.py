"""Application layer - store, loader and store bindings."""

from cartstore.application.bindings import bind_reset_after_load, bind_totals
from cartstore.application.loader import CartItemSource, CartLoader, LoadResult
from cartstore.application.store import CartStore, Listener, Unsubscribe

__all__ = [
    "CartStore",
    "Listener",
    "Unsubscribe",
    "CartLoader",
    "CartItemSource",
    "LoadResult",
    "bind_totals",
    "bind_reset_after_load",
]
