"""Feature modules: accounts, transfers and shared helpers."""
