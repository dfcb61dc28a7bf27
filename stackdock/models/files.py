"""
File models for stackdock.

Models representing the structure of JSON files in the data directory.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from stackdock.constants import (
    DEFAULT_FAILURE_RATE,
    DEFAULT_GRADIENT_PROBABILITY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MIN_DELAY,
    DEFAULT_THEME,
)

from .base import Card, Stack


class Snapshot(BaseModel):
    """Model for snapshot.json, and the engine's in-memory state.

    Immutable: every engine transition publishes a new Snapshot.
    """

    model_config = ConfigDict(frozen=True)

    stacks: Tuple[Stack, ...] = Field(default_factory=tuple)
    cards: Tuple[Card, ...] = Field(default_factory=tuple)

    def get_stack(self, stack_id: str) -> Stack | None:
        """Find a stack by id."""
        return next((s for s in self.stacks if s.id == stack_id), None)

    def get_card(self, card_id: str) -> Card | None:
        """Find a card by id."""
        return next((c for c in self.cards if c.id == card_id), None)

    @property
    def is_empty(self) -> bool:
        return not self.stacks and not self.cards


class ConfigFile(BaseModel):
    """Model for config.json file.

    Simulation and display settings.
    """

    schema_version: str = "0.1.0"

    # Simulated gateway
    min_delay: float = DEFAULT_MIN_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    failure_rate: float = Field(default=DEFAULT_FAILURE_RATE, ge=0.0, le=1.0)

    # Covers
    gradient_probability: float = Field(default=DEFAULT_GRADIENT_PROBABILITY, ge=0.0, le=1.0)

    # Display
    theme: str = DEFAULT_THEME
