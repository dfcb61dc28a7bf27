"""
Remote mutation gateway for stackdock.

The engine talks to the source of record only through the Gateway interface.
Every call is asynchronous and may raise GatewayError; the engine never
retries and never interprets anything beyond success or failure.
"""
import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from stackdock.constants import (
    DEFAULT_FAILURE_RATE,
    DEFAULT_MAX_DELAY,
    DEFAULT_MIN_DELAY,
)
from stackdock.exceptions import GatewayError
from stackdock.models.base import Card, Stack

logger = logging.getLogger(__name__)


class Gateway(ABC):
    """Contract for the remote source of record."""

    @abstractmethod
    async def create_stack(self, stack: Stack) -> Stack:
        """Create a stack remotely and return the accepted record."""

    @abstractmethod
    async def update_stack(self, stack: Stack) -> Stack:
        """Replace a stack remotely and return the accepted record."""

    @abstractmethod
    async def delete_stack(self, stack_id: str) -> None:
        """Delete a stack (and, remotely, its cards)."""

    @abstractmethod
    async def create_card(self, card: Card) -> Card:
        """Create a card remotely and return the accepted record."""

    @abstractmethod
    async def update_card(self, card: Card) -> Card:
        """Replace a card remotely and return the accepted record."""

    @abstractmethod
    async def delete_card(self, card_id: str) -> None:
        """Delete a card."""

    @abstractmethod
    async def move_card(self, card_id: str, to_stack_id: str) -> Card:
        """Move a card to another stack and return the accepted record."""

    async def fetch_stacks(self) -> List[Stack]:
        """Return all stacks known remotely."""
        return []

    async def fetch_cards(self) -> List[Card]:
        """Return all cards known remotely."""
        return []

    async def sync_data(
        self, stacks: List[Stack], cards: List[Card]
    ) -> Tuple[List[Stack], List[Card]]:
        """Push a full snapshot and return what the remote side accepted."""
        return stacks, cards


class SimulatedGateway(Gateway):
    """
    In-process stand-in for the remote service.

    Each call sleeps for a random latency and fails with a fixed probability,
    which exercises the engine's rollback paths.
    """

    def __init__(
        self,
        min_delay: float = DEFAULT_MIN_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        failure_rate: float = DEFAULT_FAILURE_RATE,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Args:
            min_delay: Shortest simulated latency in seconds.
            max_delay: Longest simulated latency in seconds.
            failure_rate: Probability (0-1) that any call fails.
            rng: Random source, injectable for reproducible runs.
        """
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError("Delays must satisfy 0 <= min_delay <= max_delay")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.min_delay = min_delay
        self.max_delay = max_delay
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    async def _round_trip(self, failure_message: Optional[str], scale: float = 1.0) -> None:
        delay = self._rng.uniform(self.min_delay, self.max_delay) * scale
        await asyncio.sleep(delay)
        if failure_message is not None and self._rng.random() < self.failure_rate:
            logger.debug("Simulated failure after %.2fs: %s", delay, failure_message)
            raise GatewayError(failure_message)

    async def create_stack(self, stack: Stack) -> Stack:
        await self._round_trip("Failed to create stack. Please try again.")
        logger.info("Created stack: %s", stack.name)
        return stack

    async def update_stack(self, stack: Stack) -> Stack:
        await self._round_trip("Failed to update stack. Please try again.")
        logger.info("Updated stack: %s", stack.name)
        return stack

    async def delete_stack(self, stack_id: str) -> None:
        await self._round_trip("Failed to delete stack. Please try again.")
        logger.info("Deleted stack: %s", stack_id)

    async def create_card(self, card: Card) -> Card:
        await self._round_trip("Failed to create card. Please try again.")
        logger.info("Created card: %s", card.name)
        return card

    async def update_card(self, card: Card) -> Card:
        await self._round_trip("Failed to update card. Please try again.")
        logger.info("Updated card: %s", card.name)
        return card

    async def delete_card(self, card_id: str) -> None:
        await self._round_trip("Failed to delete card. Please try again.")
        logger.info("Deleted card: %s", card_id)

    async def move_card(self, card_id: str, to_stack_id: str) -> Card:
        await self._round_trip("Failed to move card. Please try again.")
        logger.info("Moved card %s to stack %s", card_id, to_stack_id)
        # The simulated remote has no card store; echo back a minimal record.
        return Card(id=card_id, name=card_id, cover="", stack_id=to_stack_id)

    async def fetch_stacks(self) -> List[Stack]:
        await self._round_trip(None)
        logger.info("Fetched stacks")
        return []

    async def fetch_cards(self) -> List[Card]:
        await self._round_trip(None)
        logger.info("Fetched cards")
        return []

    async def sync_data(
        self, stacks: List[Stack], cards: List[Card]
    ) -> Tuple[List[Stack], List[Card]]:
        await self._round_trip("Failed to sync data. Please try again.", scale=1.5)
        logger.info("Synced data: %d stacks, %d cards", len(stacks), len(cards))
        return stacks, cards
