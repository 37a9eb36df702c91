"""Cart scope: binds a CartStore for code that looks it up implicitly."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from storefront.core.errors import CartScopeError

from .store import CartStore

_current_cart: ContextVar[CartStore | None] = ContextVar("current_cart", default=None)


@contextmanager
def cart_scope(store: CartStore) -> Iterator[CartStore]:
    token = _current_cart.set(store)
    try:
        yield store
    finally:
        _current_cart.reset(token)


def use_cart() -> CartStore:
    """Return the store bound by the innermost ``cart_scope``."""
    store = _current_cart.get()
    if store is None:
        raise CartScopeError("use_cart must be used within a cart_scope")
    return store
