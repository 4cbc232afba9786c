"""Budget period windows, active-budget lookup and merging.

A budget window starts on the first day of the month (monthly) or of the
year (yearly) in which the budget is created. A date is in the window when
it falls before the start of the following window.
"""

import calendar
from datetime import date
from decimal import Decimal

from ledger_engine.domain.errors import IllegalStateError, ValidationError
from ledger_engine.domain.models.enums import BudgetPeriod
from ledger_engine.utils.decimal_utils import ZERO, quantize_money


def get_start_date_for_period(today: date, period: BudgetPeriod) -> date:
    """Return the first day of the window containing ``today``."""
    if period == BudgetPeriod.MONTHLY:
        return today.replace(day=1)
    if period == BudgetPeriod.YEARLY:
        return today.replace(month=1, day=1)
    raise ValidationError(f"Unknown budget period: {period}")


def get_end_date_for_period(start: date, period: BudgetPeriod) -> date:
    """Return the last day of the window beginning at ``start``."""
    if period == BudgetPeriod.MONTHLY:
        last_day = calendar.monthrange(start.year, start.month)[1]
        return start.replace(day=last_day)
    if period == BudgetPeriod.YEARLY:
        return start.replace(month=12, day=31)
    raise ValidationError(f"Unknown budget period: {period}")


def next_period_start(start: date, period: BudgetPeriod) -> date:
    """Return ``start`` moved forward by one month or one year."""
    if period == BudgetPeriod.MONTHLY:
        if start.month == 12:
            return date(start.year + 1, 1, 1)
        return date(start.year, start.month + 1, 1)
    if period == BudgetPeriod.YEARLY:
        return date(start.year + 1, 1, 1)
    raise ValidationError(f"Unknown budget period: {period}")


def is_in_period(start: date, period: BudgetPeriod, on_date: date) -> bool:
    """Return whether ``on_date`` is before the end of the window."""
    return on_date < next_period_start(start, period)


def find_active_budget(budgets, period: BudgetPeriod, today: date):
    """Return the budget of ``period`` whose window contains ``today``.

    Args:
        budgets: Budgets of one scope (the owner, or one category).
        period: Budget period to look for.
        today: Reference date.

    Returns:
        The active budget, or ``None``.
    """
    for budget in budgets:
        if budget.period == period and budget.is_in_period(today):
            return budget
    return None


def merge_sources(target, today: date) -> list:
    """Return the active budgets that roll up into ``target``.

    A whole-user budget collects the top-level category budgets of every
    ledger the owner has. A top-level category budget collects the budgets
    of its subcategories.

    Raises:
        ValidationError: If ``target`` is a subcategory budget.
    """
    category = target.category
    if category is None:
        categories = [
            ledger_category
            for ledger in target.owner.ledgers
            for ledger_category in ledger.categories
            if ledger_category.parent is None
        ]
    elif category.parent is None:
        categories = list(category.children)
    else:
        raise ValidationError("Subcategory budgets cannot be merged into")

    sources = []
    for source_category in categories:
        source = find_active_budget(source_category.budgets, target.period, today)
        if source is not None and source is not target:
            sources.append(source)
    return sources


def merge_budget(target, today: date) -> Decimal:
    """Add the amounts of active child-scope budgets to ``target``.

    Sources are left in place. Each source is folded in at most once, so a
    repeated merge only picks up budgets created since the previous one.

    Returns:
        Decimal: The amount added by this call.

    Raises:
        IllegalStateError: If ``target`` is not active on ``today``.
        ValidationError: If ``target`` is a subcategory budget.
    """
    if not target.is_in_period(today):
        raise IllegalStateError("Only an active budget can be merged into")
    added = ZERO
    for source in merge_sources(target, today):
        if target.has_merged(source):
            continue
        added += source.amount
        target.merged_sources.append(source)
    target.amount = quantize_money(target.amount + added)
    return quantize_money(added)


__all__ = [
    "get_start_date_for_period",
    "get_end_date_for_period",
    "next_period_start",
    "is_in_period",
    "find_active_budget",
    "merge_sources",
    "merge_budget",
]
