"""Root conftest — shared test configuration."""

import os

# Importing customers_api.main builds an engine from settings; never point it at a real server
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///customers_test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
