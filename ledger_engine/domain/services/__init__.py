"""Domain services package.

Modules:
    amortization: loan repayment schedules.
    installments: installment plan fee calculator.
    budget_periods: budget windows, active lookup and merging.
    finance: owner aggregate (net worth) computation.
    linkage: linking and unlinking transactions from their collections.
    validation: shared input checks.
"""
