"""Load an owner and their accounts from a JSON description.

Expected layout::

    {
        "owner": "alice",
        "accounts": [
            {"kind": "basic", "name": "Wallet", "balance": "120.50"},
            {"kind": "credit", "name": "Visa", "credit_limit": "1000",
             "current_debt": "250"},
            {"kind": "loan", "name": "Car", "loan_amount": "12000",
             "total_periods": 12, "annual_interest_rate": "12",
             "repayment_type": "EQUAL_INTEREST", "repaid_periods": 3},
            {"kind": "borrowing", "name": "From Bob", "amount": "300"},
            {"kind": "lending", "name": "To Carol", "amount": "80",
             "hidden": false}
        ]
    }

Accounts are opened through the account service, so the owner's totals are
consistent once loading finishes.
"""

import json
from pathlib import Path

from ledger_engine.domain.errors import ValidationError
from ledger_engine.domain.models import (
    AccountCategory,
    AccountType,
    Owner,
    RepaymentType,
)
from ledger_engine.infrastructure.container import LedgerServices, create_owner

_COMMON_FIELDS = ("notes", "included_in_net_asset")


def _common(entry: dict) -> dict:
    return {field: entry[field] for field in _COMMON_FIELDS if field in entry}


def _open_account(services: LedgerServices, owner: Owner, entry: dict):
    accounts = services.accounts
    kind = entry.get("kind", "basic")
    name = entry.get("name")
    if kind == "basic":
        return accounts.create_basic_account(
            owner,
            name,
            balance=entry.get("balance", "0"),
            account_type=AccountType(entry.get("account_type", "CASH")),
            category=AccountCategory(entry.get("category", "FUNDS")),
            **_common(entry),
        )
    if kind == "credit":
        return accounts.create_credit_account(
            owner,
            name,
            credit_limit=entry["credit_limit"],
            balance=entry.get("balance", "0"),
            current_debt=entry.get("current_debt", "0"),
            bill_day=entry.get("bill_day"),
            due_day=entry.get("due_day"),
            **_common(entry),
        )
    if kind == "loan":
        return accounts.create_loan_account(
            owner,
            name,
            loan_amount=entry["loan_amount"],
            total_periods=entry["total_periods"],
            annual_interest_rate=entry.get("annual_interest_rate", "0"),
            repaid_periods=entry.get("repaid_periods", 0),
            repayment_type=RepaymentType(
                entry.get("repayment_type", RepaymentType.EQUAL_INTEREST.value)
            ),
            repayment_day=entry.get("repayment_day"),
            **_common(entry),
        )
    if kind == "borrowing":
        return accounts.create_borrowing_account(
            owner, name, amount=entry["amount"], **_common(entry)
        )
    if kind == "lending":
        return accounts.create_lending_account(
            owner, name, amount=entry["amount"], **_common(entry)
        )
    raise ValidationError(f"Unknown account kind: {kind}")


def load_owner(path: Path | str, services: LedgerServices) -> Owner:
    """Build an owner from the JSON file at ``path``.

    Args:
        path: JSON file location.
        services: Services used to open the accounts.

    Returns:
        Owner: Owner with every listed account and fresh totals.

    Raises:
        ValidationError: If the file describes an invalid account.
        KeyError: If a required field is missing.
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    owner = create_owner(payload["owner"], services)
    for entry in payload.get("accounts", []):
        account = _open_account(services, owner, entry)
        if entry.get("hidden"):
            services.accounts.hide_account(account)
    return owner


__all__ = ["load_owner"]
