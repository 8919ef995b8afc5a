"""Infrastructure adapters: settings, logging and ledger sources."""
