from __future__ import annotations

import os
from pathlib import Path
import tempfile
from uuid import uuid4

# Point the app at a throwaway SQLite database before any statuspage module
# builds the engine from cached settings.
_TEST_DB_PATH = Path(tempfile.gettempdir()) / f"statuspage-test-{uuid4().hex}.db"
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
)
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")

import pytest  # noqa: E402

from statuspage.domain.models import Base  # noqa: E402
from statuspage.persistence.db import engine  # noqa: E402


@pytest.fixture(autouse=True)
async def reset_schema_between_tests() -> None:
    # Every test starts from empty tables; counts and ids never leak between tests.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    # Dispose the async engine to prevent cross-loop connection reuse between tests.
    await engine.dispose()


def pytest_sessionfinish(session, exitstatus) -> None:
    _TEST_DB_PATH.unlink(missing_ok=True)
