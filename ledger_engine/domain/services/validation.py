"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from ledger_engine.domain.errors import ValidationError
from ledger_engine.utils.decimal_utils import coerce_decimal


def require_positive(amount, label: str = "Amount") -> Decimal:
    """Return ``amount`` as a Decimal, rejecting zero and negative values.

    Args:
        amount: Raw amount supplied by the caller.
        label: Name used in the error message.

    Returns:
        Decimal: The validated amount.

    Raises:
        ValidationError: If the amount is missing or not greater than zero.
    """
    if amount is None:
        raise ValidationError(f"{label} cannot be null")
    value = coerce_decimal(amount)
    if value <= 0:
        raise ValidationError(f"{label} must be greater than zero")
    return value


def require_non_negative(amount, label: str = "Amount") -> Decimal:
    """Return ``amount`` as a Decimal, rejecting negative values."""
    if amount is None:
        raise ValidationError(f"{label} cannot be null")
    value = coerce_decimal(amount)
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    return value


def require_name(name: str | None) -> str:
    """Reject empty names."""
    if name is None or not name.strip():
        raise ValidationError("Name cannot be null or empty")
    return name


def require_day_of_month(day: int | None, label: str) -> int | None:
    """Accept ``None`` or a day number between 1 and 31."""
    if day is None:
        return None
    if day < 1 or day > 31:
        raise ValidationError(f"{label} must be between 1 and 31")
    return day


def warn_on_negative_balance(account, logger: Logger | None) -> None:
    """Warn when an asset account is overdrawn.

    Args:
        account: Account counted as an asset.
        logger: Logger used for warnings; nothing is logged when ``None``.
    """
    if logger is not None and account.balance < 0:
        logger.warning(
            f"Asset balance is negative for account={account.name}: {account.balance}"
        )


__all__ = [
    "require_positive",
    "require_non_negative",
    "require_name",
    "require_day_of_month",
    "warn_on_negative_balance",
]
