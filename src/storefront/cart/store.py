"""Cart store: owns the committed state and drives the diff engine."""

from __future__ import annotations

import logging
from typing import Any

from storefront.core.errors import InvalidCartStateError

from .diff import CartChange, CartSideEffects, diff_cart
from .models import INITIAL_CART_STATE, CartItem, CartState, cart_actions
from .reducer import cart_reducer, find_item, total_items, total_price

logger = logging.getLogger(__name__)


class CartStore:
    """Holds the current CartState.

    ``dispatch`` commits the reducer's result first and then diffs it
    against the state it replaced, so every side effect of one action is
    delivered before ``dispatch`` returns.  A handler that dispatches again
    sees the already committed state.
    """

    def __init__(
        self,
        side_effects: CartSideEffects | None = None,
        initial: CartState = INITIAL_CART_STATE,
    ) -> None:
        state = tuple(initial)
        ids = [item.id for item in state]
        if len(set(ids)) != len(ids):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            raise InvalidCartStateError(f"Duplicate item ids in initial cart: {dupes}")
        self._side_effects = side_effects
        self._state: CartState = state
        self._last_changes: list[CartChange] = []

    @property
    def items(self) -> CartState:
        return self._state

    @property
    def total_items(self) -> int:
        return total_items(self._state)

    @property
    def total_price(self) -> float:
        return total_price(self._state)

    @property
    def last_changes(self) -> list[CartChange]:
        """Changes derived from the most recent dispatch."""
        return list(self._last_changes)

    def get(self, item_id: str) -> CartItem | None:
        return find_item(self._state, item_id)

    def dispatch(self, action: Any) -> CartState:
        previous = self._state
        new = cart_reducer(previous, action)
        if new is previous:
            self._last_changes = []
            return new

        self._state = new
        logger.debug(
            "Cart committed: %d -> %d lines", len(previous), len(new),
        )
        if self._side_effects is None:
            self._last_changes = diff_cart(previous, new)
        else:
            self._last_changes = self._side_effects.emit(previous, new)
        return new

    # -- Convenience -------------------------------------------------------

    def add_item(self, id: str, name: str, price: float) -> CartState:
        return self.dispatch(cart_actions.add_item(id, name, price))

    def remove_item(self, id: str) -> CartState:
        return self.dispatch(cart_actions.remove_item(id))

    def update_quantity(self, id: str, quantity: int) -> CartState:
        return self.dispatch(cart_actions.update_quantity(id, quantity))

    def clear_cart(self) -> CartState:
        return self.dispatch(cart_actions.clear_cart())

    def checkout(self) -> bool:
        if self._side_effects is None:
            return bool(self._state)
        return self._side_effects.checkout(self._state)
