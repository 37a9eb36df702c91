"""Cart state and action models.

CartState is an immutable tuple of CartItem in insertion order.  Actions
are frozen models discriminated on ``type``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from storefront.core.errors import InvalidActionError


class CartItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


CartState = tuple[CartItem, ...]

INITIAL_CART_STATE: CartState = ()


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AddItem(_Action):
    type: Literal["ADD_ITEM"] = "ADD_ITEM"
    id: str
    name: str
    price: float = Field(ge=0)


class RemoveItem(_Action):
    type: Literal["REMOVE_ITEM"] = "REMOVE_ITEM"
    id: str


class UpdateQuantity(_Action):
    type: Literal["UPDATE_QUANTITY"] = "UPDATE_QUANTITY"
    id: str
    quantity: int  # <= 0 removes the item


class ClearCart(_Action):
    type: Literal["CLEAR_CART"] = "CLEAR_CART"


CartAction = Annotated[
    Union[AddItem, RemoveItem, UpdateQuantity, ClearCart],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[Any] = TypeAdapter(CartAction)


def parse_action(data: dict[str, Any]) -> AddItem | RemoveItem | UpdateQuantity | ClearCart:
    """Build an action from a plain mapping such as ``{"type": "CLEAR_CART"}``."""
    try:
        return _action_adapter.validate_python(data)
    except ValidationError as exc:
        raise InvalidActionError(f"Invalid cart action {data!r}: {exc}") from exc


class cart_actions:  # noqa: N801 - used as a namespace
    """Action creators."""

    @staticmethod
    def add_item(id: str, name: str, price: float) -> AddItem:
        return AddItem(id=id, name=name, price=price)

    @staticmethod
    def remove_item(id: str) -> RemoveItem:
        return RemoveItem(id=id)

    @staticmethod
    def update_quantity(id: str, quantity: int) -> UpdateQuantity:
        return UpdateQuantity(id=id, quantity=quantity)

    @staticmethod
    def clear_cart() -> ClearCart:
        return ClearCart()
