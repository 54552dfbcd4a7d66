"""Thread-safe containers shared by the services."""

from . import concurrent_dict  # re-export module

__all__ = ["concurrent_dict"]
