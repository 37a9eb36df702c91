"""Logging setup."""

from storefront.observability.logger import get_logger, new_trace_id, setup_logging

__all__ = ["get_logger", "new_trace_id", "setup_logging"]
