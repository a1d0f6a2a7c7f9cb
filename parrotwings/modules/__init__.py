"""Domain modules: accounts, ledger, transactions and tokens."""
