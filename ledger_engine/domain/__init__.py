"""Domain package for accounting rules and core models.

Import models from ``ledger_engine.domain.models`` and calculators from the
modules under ``ledger_engine.domain.services``.
"""
