"""Root conftest — shared test configuration."""

import os

# Never reach the real GoREST or a real database from tests
os.environ.setdefault("GOREST_BASE_URL", "https://gorest.test/public/v2")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
