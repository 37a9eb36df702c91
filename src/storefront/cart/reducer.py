"""Pure cart transition function and derived queries."""

from __future__ import annotations

import logging
from typing import Any

from .models import AddItem, CartItem, CartState, ClearCart, RemoveItem, UpdateQuantity

logger = logging.getLogger(__name__)


def cart_reducer(state: CartState, action: Any) -> CartState:
    """Return the state that results from applying *action* to *state*.

    Never mutates *state*.  Items keep their position on update; new items
    are appended.  Unrecognised actions return *state* unchanged.
    """
    if isinstance(action, AddItem):
        if any(item.id == action.id for item in state):
            return tuple(
                item.model_copy(update={"quantity": item.quantity + 1})
                if item.id == action.id else item
                for item in state
            )
        return state + (
            CartItem(id=action.id, name=action.name, price=action.price, quantity=1),
        )

    if isinstance(action, RemoveItem):
        return _without(state, action.id)

    if isinstance(action, UpdateQuantity):
        if action.quantity <= 0:
            return _without(state, action.id)
        if find_item(state, action.id) is None:
            return state
        return tuple(
            item.model_copy(update={"quantity": action.quantity})
            if item.id == action.id else item
            for item in state
        )

    if isinstance(action, ClearCart):
        return () if state else state

    logger.debug("Ignoring unrecognised cart action: %r", action)
    return state


def _without(state: CartState, item_id: str) -> CartState:
    if not any(item.id == item_id for item in state):
        return state
    return tuple(item for item in state if item.id != item_id)


def total_items(state: CartState) -> int:
    return sum(item.quantity for item in state)


def total_price(state: CartState) -> float:
    return sum((item.subtotal for item in state), 0.0)


def find_item(state: CartState, item_id: str) -> CartItem | None:
    for item in state:
        if item.id == item_id:
            return item
    return None
