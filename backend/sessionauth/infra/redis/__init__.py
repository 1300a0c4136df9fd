"""Redis single-use ledger."""
