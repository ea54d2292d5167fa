"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for exercising the
registries under concurrency and against a mocked motor client.
"""

import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Motor Client Fixtures
# =============================================================================

@pytest.fixture
def mock_motor_client():
    """
    A MagicMock standing in for AsyncIOMotorClient.

    ``admin.command`` is an AsyncMock answering pings with ``{"ok": 1}``.
    """
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


# =============================================================================
# Concurrency Helpers
# =============================================================================

class GatedConnector:
    """
    Connector that parks every call until its database is released.

    Databases listed in ``fail`` raise the given error once released.
    """

    def __init__(self, client, fail: dict = None):
        self.client = client
        self.fail = dict(fail or {})
        self.calls: list[str] = []
        self._gates: dict[str, asyncio.Event] = {}

    def gate(self, name: str) -> asyncio.Event:
        return self._gates.setdefault(name, asyncio.Event())

    def release(self, name: str) -> None:
        self.gate(name).set()

    async def __call__(self, name: str, uri: str):
        from app.database.connections import DatabaseConnection

        self.calls.append(name)
        await self.gate(name).wait()
        error = self.fail.pop(name, None)
        if error is not None:
            raise error
        return DatabaseConnection(name=name, client=self.client, database=self.client[name])


@pytest.fixture
def gated_connector(mock_async_mongo_client):
    """GatedConnector over the mongomock client."""
    return GatedConnector(mock_async_mongo_client)

