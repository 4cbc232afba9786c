"""Domain error taxonomy for the accounting engine.

Every engine failure is raised as a subclass of :class:`LedgerError` so
callers can reject a request or roll back their transaction boundary. The
four families mirror how failures are handled upstream:

* validation errors: bad input, raised before any state changes;
* capability errors: the account variant does not support the operation;
* limit errors: a domain rule (credit limit, available funds) was hit;
* state errors: the object is in a state that forbids the operation.
"""


class LedgerError(Exception):
    """Base class for accounting engine errors."""


class ValidationError(LedgerError, ValueError):
    """Raised when an operation receives invalid input."""


class OwnershipError(ValidationError):
    """Raised when objects belonging to different owners are combined."""


class BudgetConflictError(ValidationError):
    """Raised when an active budget already exists for a scope and period."""


class UnsupportedOperationError(LedgerError):
    """Raised when an account variant does not support an operation."""


class LimitError(LedgerError):
    """Raised when an operation would break a monetary limit."""


class CreditLimitExceededError(LimitError):
    """Raised when a debit would push credit debt past its limit."""


class InsufficientFundsError(LimitError):
    """Raised when a source account cannot cover an amount."""


class RepaymentExceedsDebtError(LimitError):
    """Raised when a repayment is larger than what is owed."""


class IllegalStateError(LedgerError):
    """Raised when an object's state forbids the operation."""


__all__ = [
    "LedgerError",
    "ValidationError",
    "OwnershipError",
    "BudgetConflictError",
    "UnsupportedOperationError",
    "LimitError",
    "CreditLimitExceededError",
    "InsufficientFundsError",
    "RepaymentExceedsDebtError",
    "IllegalStateError",
]
