"""Cartstore - a shopping cart state container.

A reducer computes each new cart state from the current one and an
action; a store owns the state and notifies subscribers; a loader fills
the cart from a remote source.
"""

__version__ = "0.1.0"
