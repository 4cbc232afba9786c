"""Domain policies package."""

from .posting import (
    check_postable,
    check_sufficient_funds,
    is_postable,
)

__all__ = ["is_postable", "check_postable", "check_sufficient_funds"]
