"""Enumerated tags used across the domain models."""

from enum import Enum


class AccountCategory(str, Enum):
    """High-level grouping of account types."""

    FUNDS = "FUNDS"
    CREDIT = "CREDIT"
    RECHARGE = "RECHARGE"
    INVEST = "INVEST"
    VIRTUAL_ACCOUNT = "VIRTUAL_ACCOUNT"


class AccountType(str, Enum):
    """Concrete account kinds a user can open."""

    CASH = "CASH"
    DEBIT_CARD = "DEBIT_CARD"
    PASSBOOK = "PASSBOOK"
    PAYPAL = "PAYPAL"
    PENSION = "PENSION"
    OTHER_FUNDS = "OTHER_FUNDS"

    CREDIT_CARD = "CREDIT_CARD"
    LOAN = "LOAN"
    OTHER_CREDIT = "OTHER_CREDIT"

    MOBILE_RECHARGE = "MOBILE_RECHARGE"
    FUEL_CARD = "FUEL_CARD"
    APPLE_ID = "APPLE_ID"
    OTHER_RECHARGE = "OTHER_RECHARGE"

    INVESTMENT = "INVESTMENT"
    STOCKS = "STOCKS"
    FUND = "FUND"
    GOLD = "GOLD"
    INSURANCE = "INSURANCE"
    FUTURES = "FUTURES"
    CRYPTO = "CRYPTO"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"
    OTHER_INVEST = "OTHER_INVEST"

    BORROWING = "BORROWING"
    LENDING = "LENDING"


class TransactionType(str, Enum):
    """Kind of ledger event."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    TRANSFER = "TRANSFER"


class CategoryType(str, Enum):
    """Whether a ledger category classifies income or expenses."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class RepaymentType(str, Enum):
    """Loan amortization schedules."""

    EQUAL_INTEREST = "EQUAL_INTEREST"
    EQUAL_PRINCIPAL = "EQUAL_PRINCIPAL"
    EQUAL_PRINCIPAL_AND_INTEREST = "EQUAL_PRINCIPAL_AND_INTEREST"
    INTEREST_BEFORE_PRINCIPAL = "INTEREST_BEFORE_PRINCIPAL"


class FeeStrategy(str, Enum):
    """How installment fees are distributed over the periods."""

    EVENLY_SPLIT = "EVENLY_SPLIT"
    UPFRONT = "UPFRONT"
    FINAL = "FINAL"


class BudgetPeriod(str, Enum):
    """Budget window length."""

    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


__all__ = [
    "AccountCategory",
    "AccountType",
    "TransactionType",
    "CategoryType",
    "RepaymentType",
    "FeeStrategy",
    "BudgetPeriod",
]
