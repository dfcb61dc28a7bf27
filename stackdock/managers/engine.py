"""
Optimistic mutation engine for stackdock.

Every mutation is applied to the in-memory snapshot immediately, then sent
to the gateway. When the gateway answers, the engine either commits (status
back to idle, snapshot saved) or rolls the change back (status error, message
surfaced). Mutation methods are plain methods that apply their change before
returning an asyncio.Task for the settlement, so callers see the optimistic
state as soon as the method returns.

Overlapping operations are not serialized. Each one settles on its own, and
the last settlement to run wins: a slow failing rollback can undo the visible
effect of a faster operation on the same record. sync_status and
error_message are shared by all operations.
"""
import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Optional, Set, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from stackdock.constants import (
    DEFAULT_GRADIENT_PROBABILITY,
    DEFAULT_THEME,
    FALLBACK_ERROR_MESSAGES,
    VALID_THEMES,
    VALIDATION_INVALID_THEME,
)
from stackdock.exceptions import ValidationError
from stackdock.managers import selectors
from stackdock.managers.gateway import Gateway
from stackdock.managers.seed import demo_snapshot
from stackdock.managers.storage_manager import StorageManager
from stackdock.models.base import Card, CoverType, Stack, SyncStatus
from stackdock.models.files import Snapshot
from stackdock.models.updates import CardUpdate, NewCard, StackUpdate
from stackdock.signals import signal
from stackdock.utils import new_cover, placeholder_image

logger = logging.getLogger(__name__)

_UNSET: Any = object()

Record = Union[Stack, Card]
Rollback = Callable[[Snapshot], Snapshot]


class MutationResult(BaseModel):
    """Outcome of one engine operation, returned by its settlement task.

    Attributes:
        ok: True if the gateway accepted the mutation.
        op: Operation name, e.g. "create_stack".
        record: The optimistic record that was sent, if any.
        error: Failure message when ok is False.
        skipped: True when the target did not exist and nothing was done.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool
    op: str
    record: Optional[Record] = None
    error: Optional[str] = None
    skipped: bool = False


def _replace(records, record_id: str, make: Callable):
    return tuple(make(r) if r.id == record_id else r for r in records)


class MutationEngine:
    """
    Holds the canonical snapshot and applies optimistic mutations.

    Handles:
    - Stack and card mutations with commit/rollback
    - Selection and swipe-navigation state
    - Loading, seeding and saving through a StorageManager
    """

    def __init__(
        self,
        gateway: Gateway,
        storage: Optional[StorageManager] = None,
        rng: Optional[random.Random] = None,
        gradient_probability: float = DEFAULT_GRADIENT_PROBABILITY,
        theme: str = DEFAULT_THEME,
    ) -> None:
        """
        Initialize the engine with an empty snapshot.

        Args:
            gateway: Remote source of record.
            storage: Snapshot store. When None, nothing is persisted.
            rng: Random source for cover generation.
            gradient_probability: Chance that a new stack gets a gradient cover.
            theme: Initial theme, "light" or "dark".
        """
        self.gateway = gateway
        self.storage = storage
        self._rng = rng
        self._gradient_probability = gradient_probability
        self._snapshot = Snapshot()
        self._pending: Set[asyncio.Task] = set()

        self.sync_status = SyncStatus.IDLE
        self.error_message: Optional[str] = None

        self.is_open = False
        self.theme = theme
        self.active_stack_id: Optional[str] = None
        self.is_swipe_mode = False
        self.current_swipe_index = 0

    # =========================================================================
    # Signals
    # =========================================================================

    @signal
    def snapshot_changed(self, snapshot: Snapshot) -> None:
        """Emitted after every optimistic apply, commit and rollback."""

    @signal
    def status_changed(self, status: SyncStatus, message: Optional[str]) -> None:
        """Emitted when sync_status or error_message changes."""

    # =========================================================================
    # State access
    # =========================================================================

    @property
    def snapshot(self) -> Snapshot:
        """The current immutable snapshot."""
        return self._snapshot

    @property
    def stacks(self):
        return self._snapshot.stacks

    @property
    def cards(self):
        return self._snapshot.cards

    @property
    def pending_count(self) -> int:
        """Number of operations whose gateway call has not settled."""
        return len(self._pending)

    def cards_for_stack(self, stack_id: str):
        return selectors.cards_for_stack(self._snapshot, stack_id)

    def card_count(self, stack_id: str) -> int:
        return selectors.card_count(self._snapshot, stack_id)

    async def wait_idle(self) -> None:
        """Wait until every in-flight operation has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _apply(
        self,
        snapshot: Optional[Snapshot] = None,
        status: Optional[SyncStatus] = None,
        error_message: Any = _UNSET,
    ) -> None:
        """Perform one atomic transition, then notify observers."""
        previous = (self.sync_status, self.error_message)

        if snapshot is not None:
            self._snapshot = snapshot
        if status is not None:
            self.sync_status = status
        if error_message is not _UNSET:
            self.error_message = error_message

        # A vanished stack cannot stay selected.
        if self.active_stack_id is not None and self._snapshot.get_stack(self.active_stack_id) is None:
            self.active_stack_id = None
            self.is_swipe_mode = False
            self.current_swipe_index = 0
        self.current_swipe_index = min(self.current_swipe_index, self._max_swipe_index())

        self.snapshot_changed.emit(self._snapshot)
        if (self.sync_status, self.error_message) != previous:
            self.status_changed.emit(self.sync_status, self.error_message)

    # =========================================================================
    # Operation protocol
    # =========================================================================

    def _run(
        self,
        op: str,
        snapshot: Snapshot,
        call: Callable[[], Awaitable[Any]],
        rollback: Rollback,
        record: Optional[Record] = None,
    ) -> "asyncio.Task[MutationResult]":
        """Apply an optimistic snapshot, then settle it against the gateway.

        Args:
            op: Operation name, used for logs and fallback messages.
            snapshot: The post-mutation snapshot to publish now.
            call: Factory for the gateway coroutine.
            rollback: Maps the snapshot current at settlement time to its
                reverted form.
            record: The record sent to the gateway, reported in the result.

        Returns:
            Task resolving to the MutationResult once the gateway answers.
        """
        loop = asyncio.get_running_loop()
        self._apply(snapshot, status=SyncStatus.SYNCING)
        logger.debug("%s applied optimistically", op)

        task = loop.create_task(self._settle(op, call(), rollback, record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _settle(
        self,
        op: str,
        call: Awaitable[Any],
        rollback: Rollback,
        record: Optional[Record],
    ) -> MutationResult:
        try:
            await call
        except Exception as e:
            message = str(e) or FALLBACK_ERROR_MESSAGES[op]
            self._apply(rollback(self._snapshot), status=SyncStatus.ERROR, error_message=message)
            logger.warning("%s rolled back: %s", op, message)
            return MutationResult(ok=False, op=op, record=record, error=message)

        self._apply(status=SyncStatus.IDLE, error_message=None)
        self.save()
        logger.debug("%s committed", op)
        return MutationResult(ok=True, op=op, record=record)

    def _skip(self, op: str) -> "asyncio.Future[MutationResult]":
        future = asyncio.get_running_loop().create_future()
        future.set_result(MutationResult(ok=True, op=op, skipped=True))
        logger.debug("%s skipped: target not found", op)
        return future

    # =========================================================================
    # Stack operations
    # =========================================================================

    def create_stack(self, name: str) -> "asyncio.Task[MutationResult]":
        """Create a stack with a generated id and cover.

        Args:
            name: Display name for the new stack.

        Returns:
            Task resolving to the MutationResult.

        Raises:
            ValidationError: If the name is empty.
        """
        cover, cover_type = new_cover(self._rng, self._gradient_probability)
        try:
            stack = Stack(name=name, cover=cover, cover_type=CoverType(cover_type))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid stack: {e.errors()[0]['msg']}")

        before = self._snapshot
        return self._run(
            "create_stack",
            before.model_copy(update={"stacks": before.stacks + (stack,)}),
            lambda: self.gateway.create_stack(stack),
            lambda s: s.model_copy(
                update={"stacks": tuple(x for x in s.stacks if x.id != stack.id)}
            ),
            record=stack,
        )

    def delete_stack(self, stack_id: str) -> "asyncio.Task[MutationResult]":
        """Delete a stack and all of its cards in one transition.

        Clears the selection if the stack was active. On failure the exact
        removed stack and cards are put back.

        Args:
            stack_id: ID of the stack to delete.

        Returns:
            Task resolving to the MutationResult.
        """
        before = self._snapshot
        removed_stack = before.get_stack(stack_id)
        removed_cards = selectors.cards_for_stack(before, stack_id)

        def rollback(s: Snapshot) -> Snapshot:
            stacks = s.stacks
            if removed_stack is not None and s.get_stack(stack_id) is None:
                stacks = stacks + (removed_stack,)
            present = {c.id for c in s.cards}
            cards = s.cards + tuple(c for c in removed_cards if c.id not in present)
            return s.model_copy(update={"stacks": stacks, "cards": cards})

        return self._run(
            "delete_stack",
            before.model_copy(
                update={
                    "stacks": tuple(s for s in before.stacks if s.id != stack_id),
                    "cards": tuple(c for c in before.cards if c.stack_id != stack_id),
                }
            ),
            lambda: self.gateway.delete_stack(stack_id),
            rollback,
            record=removed_stack,
        )

    def update_stack(self, stack_id: str, update: StackUpdate) -> "asyncio.Future[MutationResult]":
        """Merge an update onto a stack and bump updated_at.

        Does nothing if the stack does not exist.

        Args:
            stack_id: ID of the stack to update.
            update: Fields to change.

        Returns:
            Awaitable resolving to the MutationResult.
        """
        before = self._snapshot
        original = before.get_stack(stack_id)
        if original is None:
            return self._skip("update_stack")

        updated = original.touched(**update.changes())
        return self._run(
            "update_stack",
            before.model_copy(update={"stacks": _replace(before.stacks, stack_id, lambda _: updated)}),
            lambda: self.gateway.update_stack(updated),
            lambda s: s.model_copy(update={"stacks": _replace(s.stacks, stack_id, lambda _: original)}),
            record=updated,
        )

    # =========================================================================
    # Card operations
    # =========================================================================

    def create_card(self, data: NewCard) -> "asyncio.Task[MutationResult]":
        """Create a card in the given stack.

        The stack_id is taken as written and not checked against the snapshot.

        Args:
            data: Caller-supplied card fields.

        Returns:
            Task resolving to the MutationResult.
        """
        card = Card(
            name=data.name,
            description=data.description,
            cover=data.cover or placeholder_image(data.name.lower().replace(" ", "-")),
            stack_id=data.stack_id,
        )

        before = self._snapshot
        return self._run(
            "create_card",
            before.model_copy(update={"cards": before.cards + (card,)}),
            lambda: self.gateway.create_card(card),
            lambda s: s.model_copy(update={"cards": tuple(c for c in s.cards if c.id != card.id)}),
            record=card,
        )

    def delete_card(self, card_id: str) -> "asyncio.Task[MutationResult]":
        """Delete a card; on failure it is put back.

        Args:
            card_id: ID of the card to delete.

        Returns:
            Task resolving to the MutationResult.
        """
        before = self._snapshot
        removed = before.get_card(card_id)

        def rollback(s: Snapshot) -> Snapshot:
            if removed is None or s.get_card(card_id) is not None:
                return s
            return s.model_copy(update={"cards": s.cards + (removed,)})

        return self._run(
            "delete_card",
            before.model_copy(update={"cards": tuple(c for c in before.cards if c.id != card_id)}),
            lambda: self.gateway.delete_card(card_id),
            rollback,
            record=removed,
        )

    def update_card(self, card_id: str, update: CardUpdate) -> "asyncio.Future[MutationResult]":
        """Merge an update onto a card and bump updated_at.

        Does nothing if the card does not exist.
        """
        before = self._snapshot
        original = before.get_card(card_id)
        if original is None:
            return self._skip("update_card")

        updated = original.touched(**update.changes())
        return self._run(
            "update_card",
            before.model_copy(update={"cards": _replace(before.cards, card_id, lambda _: updated)}),
            lambda: self.gateway.update_card(updated),
            lambda s: s.model_copy(update={"cards": _replace(s.cards, card_id, lambda _: original)}),
            record=updated,
        )

    def move_card(self, card_id: str, to_stack_id: str) -> "asyncio.Future[MutationResult]":
        """Move a card to another stack.

        Does nothing if the card does not exist. On failure only stack_id and
        updated_at are restored.

        Args:
            card_id: ID of the card to move.
            to_stack_id: ID of the destination stack.

        Returns:
            Awaitable resolving to the MutationResult.
        """
        before = self._snapshot
        original = before.get_card(card_id)
        if original is None:
            return self._skip("move_card")

        moved = original.touched(stack_id=to_stack_id)
        restore = {"stack_id": original.stack_id, "updated_at": original.updated_at}
        return self._run(
            "move_card",
            before.model_copy(update={"cards": _replace(before.cards, card_id, lambda _: moved)}),
            lambda: self.gateway.move_card(card_id, to_stack_id),
            lambda s: s.model_copy(
                update={"cards": _replace(s.cards, card_id, lambda c: c.model_copy(update=restore))}
            ),
            record=moved,
        )

    def resync(self) -> "asyncio.Task[MutationResult]":
        """Push the whole snapshot to the gateway.

        Nothing is applied optimistically, so a failure only sets the error state.
        """
        current = self._snapshot
        return self._run(
            "resync",
            current,
            lambda: self.gateway.sync_data(list(current.stacks), list(current.cards)),
            lambda s: s,
        )

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self) -> bool:
        """Save the current snapshot. Failures are logged by the storage manager."""
        if self.storage is None:
            return False
        return self.storage.save(self._snapshot)

    def initialize_from_storage(self) -> Snapshot:
        """Adopt the stored snapshot, or seed and save the demo dataset.

        A stored snapshot without stacks counts as absent.

        Returns:
            The snapshot now held by the engine.
        """
        stored = self.storage.load() if self.storage is not None else None
        if stored is not None and stored.stacks:
            logger.debug("Loaded %d stacks, %d cards", len(stored.stacks), len(stored.cards))
            self._apply(stored)
        else:
            logger.info("No stored snapshot, seeding demo data")
            self._apply(demo_snapshot(self._rng))
            self.save()
        return self._snapshot

    # =========================================================================
    # Dock, selection and swipe navigation
    # =========================================================================

    def open_dock(self) -> None:
        self.is_open = True

    def close_dock(self) -> None:
        """Close the dock, clearing selection and swipe mode."""
        self.is_open = False
        self.active_stack_id = None
        self.is_swipe_mode = False

    def toggle_dock(self) -> None:
        if self.is_open:
            self.close_dock()
        else:
            self.open_dock()

    def set_theme(self, theme: str) -> None:
        """Switch between the light and dark theme.

        Raises:
            ValidationError: If the theme is unknown.
        """
        if theme not in VALID_THEMES:
            raise ValidationError(VALIDATION_INVALID_THEME)
        self.theme = theme

    def set_active_stack(self, stack_id: Optional[str]) -> None:
        """Select a stack (or none), leaving swipe mode."""
        self.active_stack_id = stack_id
        self.is_swipe_mode = False
        self.current_swipe_index = 0

    def _max_swipe_index(self) -> int:
        if self.active_stack_id is None:
            return 0
        return max(self.card_count(self.active_stack_id) - 1, 0)

    def enter_swipe_mode(self) -> None:
        self.is_swipe_mode = True
        self.current_swipe_index = 0

    def exit_swipe_mode(self) -> None:
        self.is_swipe_mode = False
        self.current_swipe_index = 0

    def set_swipe_index(self, index: int) -> None:
        """Jump to a card position, clamped to the active stack's cards."""
        self.current_swipe_index = min(max(index, 0), self._max_swipe_index())

    def next_card(self) -> None:
        if self.current_swipe_index < self._max_swipe_index():
            self.current_swipe_index += 1

    def prev_card(self) -> None:
        if self.current_swipe_index > 0:
            self.current_swipe_index -= 1

    def clear_error(self) -> None:
        """Dismiss the current error and return to idle."""
        self._apply(status=SyncStatus.IDLE, error_message=None)
