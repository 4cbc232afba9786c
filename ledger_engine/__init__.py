"""Personal ledger accounting engine."""
