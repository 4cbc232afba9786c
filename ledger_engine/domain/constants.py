"""Domain constants for the accounting engine."""

MAX_LOAN_PERIODS = 480

DEFAULT_LEDGER_NAME = "Default Ledger"

EXTERNAL_ACCOUNT_LABEL = "External Account"


__all__ = [
    "MAX_LOAN_PERIODS",
    "DEFAULT_LEDGER_NAME",
    "EXTERNAL_ACCOUNT_LABEL",
]
