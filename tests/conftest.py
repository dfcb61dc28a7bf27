"""
Test fixtures for the stackdock test suite.

Provides:
- Temporary directory fixtures (isolated from the working directory)
- Gateways whose outcomes the test controls
- Mock data builders for stacks, cards and snapshots
"""

import asyncio
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generator, List, Optional, Tuple

import pytest

from stackdock.exceptions import GatewayError
from stackdock.managers.engine import MutationEngine
from stackdock.managers.gateway import Gateway
from stackdock.managers.storage_manager import StorageManager
from stackdock.models.base import Card, CoverType, Stack
from stackdock.models.files import Snapshot


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test isolation."""
    temp_path = Path(tempfile.mkdtemp(prefix="stackdock_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def data_dir(temp_dir: Path) -> Path:
    """Path to a not-yet-created data directory."""
    return temp_dir / ".stackdock"


@pytest.fixture
def storage(data_dir: Path) -> StorageManager:
    return StorageManager(data_dir)


@pytest.fixture(autouse=True)
def reset_stackdock_logger() -> Generator[None, None, None]:
    """Drop handlers the CLI installs so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("stackdock")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Gateways
# =============================================================================


@dataclass
class PendingCall:
    """A gateway call waiting for the test to decide its outcome."""

    op: str
    args: Tuple[Any, ...]
    future: "asyncio.Future[None]" = field(repr=False)

    def resolve(self) -> None:
        self.future.set_result(None)

    def reject(self, message: str = "") -> None:
        self.future.set_exception(GatewayError(message))


class ScriptedGateway(Gateway):
    """Gateway whose calls block until the test resolves or rejects them."""

    def __init__(self) -> None:
        self.calls: List[PendingCall] = []

    async def _call(self, op: str, *args: Any) -> None:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(op, args, future))
        await future

    async def wait_for_calls(self, count: int) -> List[PendingCall]:
        """Yield to the loop until count calls have arrived."""
        for _ in range(100):
            if len(self.calls) >= count:
                return self.calls[:count]
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} gateway calls, got {len(self.calls)}")

    async def create_stack(self, stack):
        await self._call("create_stack", stack)
        return stack

    async def update_stack(self, stack):
        await self._call("update_stack", stack)
        return stack

    async def delete_stack(self, stack_id):
        await self._call("delete_stack", stack_id)

    async def create_card(self, card):
        await self._call("create_card", card)
        return card

    async def update_card(self, card):
        await self._call("update_card", card)
        return card

    async def delete_card(self, card_id):
        await self._call("delete_card", card_id)

    async def move_card(self, card_id, to_stack_id):
        await self._call("move_card", card_id, to_stack_id)
        return Card(id=card_id, name=card_id, cover="", stack_id=to_stack_id)

    async def sync_data(self, stacks, cards):
        await self._call("sync_data", stacks, cards)
        return stacks, cards


class InstantGateway(Gateway):
    """Gateway that answers immediately, optionally always failing."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[str] = []

    async def _call(self, op: str) -> None:
        self.calls.append(op)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error

    async def create_stack(self, stack):
        await self._call("create_stack")
        return stack

    async def update_stack(self, stack):
        await self._call("update_stack")
        return stack

    async def delete_stack(self, stack_id):
        await self._call("delete_stack")

    async def create_card(self, card):
        await self._call("create_card")
        return card

    async def update_card(self, card):
        await self._call("update_card")
        return card

    async def delete_card(self, card_id):
        await self._call("delete_card")

    async def move_card(self, card_id, to_stack_id):
        await self._call("move_card")
        return Card(id=card_id, name=card_id, cover="", stack_id=to_stack_id)


@pytest.fixture
def gateway() -> ScriptedGateway:
    return ScriptedGateway()


# =============================================================================
# Mock Data Builders
# =============================================================================


class MockDataBuilder:
    """Helper class for building stacks, cards and snapshots for testing."""

    @staticmethod
    def create_stack(name: str = "Test Stack", id: Optional[str] = None) -> Stack:
        kwargs = {"id": id} if id else {}
        return Stack(name=name, cover="#6366f1", cover_type=CoverType.COLOR, **kwargs)

    @staticmethod
    def create_card(
        name: str = "Test Card",
        stack_id: str = "S1",
        id: Optional[str] = None,
        description: Optional[str] = "Test description",
    ) -> Card:
        kwargs = {"id": id} if id else {}
        return Card(
            name=name,
            description=description,
            cover="https://picsum.photos/seed/test/400/300",
            stack_id=stack_id,
            **kwargs,
        )

    @classmethod
    def create_snapshot(cls) -> Snapshot:
        """Two stacks: S1 holding C1 and C2, S2 holding C3."""
        return Snapshot(
            stacks=(cls.create_stack("Reading", id="S1"), cls.create_stack("Shopping", id="S2")),
            cards=(
                cls.create_card("Dune", stack_id="S1", id="C1"),
                cls.create_card("Neuromancer", stack_id="S1", id="C2"),
                cls.create_card("Keyboard", stack_id="S2", id="C3"),
            ),
        )


@pytest.fixture
def builder() -> type:
    return MockDataBuilder


@pytest.fixture
def sample_snapshot() -> Snapshot:
    return MockDataBuilder.create_snapshot()


@pytest.fixture
def engine(gateway: ScriptedGateway, storage: StorageManager, sample_snapshot: Snapshot) -> MutationEngine:
    """Engine preloaded with the sample snapshot (already saved)."""
    storage.save(sample_snapshot)
    engine = MutationEngine(gateway, storage)
    engine.initialize_from_storage()
    return engine
