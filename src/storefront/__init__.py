"""Typed event bus and cart state machine for a demo storefront."""

__version__ = "0.1.0"
