"""Cart state machine, diff engine and store.

Public API
----------
::

    from storefront.cart import (
        CartStore,
        cart_reducer,
        diff_cart,
        cart_scope,
        use_cart,
    )
"""

from __future__ import annotations

from storefront.cart.diff import CartChange, CartSideEffects, diff_cart
from storefront.cart.models import (
    INITIAL_CART_STATE,
    AddItem,
    CartAction,
    CartItem,
    CartState,
    ClearCart,
    RemoveItem,
    UpdateQuantity,
    cart_actions,
    parse_action,
)
from storefront.cart.reducer import cart_reducer, total_items, total_price
from storefront.cart.scope import cart_scope, use_cart
from storefront.cart.store import CartStore

__all__ = [
    # State machine
    "INITIAL_CART_STATE",
    "AddItem",
    "CartAction",
    "CartItem",
    "CartState",
    "ClearCart",
    "RemoveItem",
    "UpdateQuantity",
    "cart_actions",
    "cart_reducer",
    "parse_action",
    "total_items",
    "total_price",
    # Diff engine
    "CartChange",
    "CartSideEffects",
    "diff_cart",
    # Store
    "CartStore",
    "cart_scope",
    "use_cart",
]
