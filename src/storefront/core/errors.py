"""Custom exception hierarchy for the storefront."""


class StorefrontError(Exception):
    """Base exception for all storefront errors."""


# --- Configuration ---
class ConfigError(StorefrontError):
    """Invalid or missing configuration."""


# --- Events ---
class EventError(StorefrontError):
    """Event bus or registry error."""


class UnknownEventError(EventError):
    """Event name is not part of the registry (or of a facade's domain)."""

    def __init__(self, name: object, reason: str = "unknown event"):
        self.name = name
        self.reason = reason
        super().__init__(f"{reason}: {name!r}")


class PayloadValidationError(EventError):
    """Payload does not match the schema registered for the event."""


class SubscriptionError(EventError):
    """Handler registered with the wrong subscription method."""


class BusClosedError(EventError):
    """Subscribe attempted on a closed bus."""


# --- Cart ---
class CartError(StorefrontError):
    """Cart state machine error."""


class CartScopeError(CartError):
    """Cart accessed outside of an active cart scope."""


class InvalidActionError(CartError):
    """Mapping could not be parsed into a cart action."""


class InvalidCartStateError(CartError):
    """Seeded cart state breaks an invariant (e.g. duplicate item ids)."""
