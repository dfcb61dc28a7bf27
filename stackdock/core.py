"""
StackDockCore - wires configuration, storage, gateway and engine together.

Front ends construct one core per session and drive its engine.
"""

import random
from pathlib import Path
from typing import Optional

from stackdock.constants import DEFAULT_DATA_DIR, ConfigManager
from stackdock.exceptions import ConfigurationError, NotFoundError
from stackdock.managers import (
    Gateway,
    MutationEngine,
    SimulatedGateway,
    StorageManager,
)
from stackdock.models.base import Card, Stack


class StackDockCore:
    """
    Core class for a stackdock session.

    Builds:
    - ConfigManager: Settings from <data_dir>/config.json
    - StorageManager: Snapshot persistence
    - Gateway: SimulatedGateway unless one is supplied
    - MutationEngine: Loaded from storage, or seeded with demo data
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        gateway: Optional[Gateway] = None,
        min_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        failure_rate: Optional[float] = None,
        rng: Optional[random.Random] = None,
        load: bool = True,
    ):
        """
        Initialize the core.

        Args:
            data_dir: Data directory. Defaults to .stackdock/ in current directory.
            gateway: Gateway to use instead of the simulated one.
            min_delay: Override for the simulated gateway's minimum latency.
            max_delay: Override for the simulated gateway's maximum latency.
            failure_rate: Override for the simulated gateway's failure rate.
            rng: Random source shared by the simulated gateway and the engine.
            load: Load (or seed) the snapshot immediately.

        Raises:
            ConfigurationError: If the simulated gateway settings are invalid.
        """
        self.data_dir = data_dir or DEFAULT_DATA_DIR
        self.config = ConfigManager(data_dir=self.data_dir)
        self.storage = StorageManager(self.data_dir)

        if gateway is None:
            try:
                gateway = SimulatedGateway(
                    min_delay=self.config.min_delay() if min_delay is None else min_delay,
                    max_delay=self.config.max_delay() if max_delay is None else max_delay,
                    failure_rate=self.config.failure_rate() if failure_rate is None else failure_rate,
                    rng=rng,
                )
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid gateway settings (see {self.config.config_path}): {e}"
                ) from e
        self.gateway = gateway

        self.engine = MutationEngine(
            self.gateway,
            self.storage,
            rng=rng,
            gradient_probability=self.config.gradient_probability(),
            theme=self.config.theme(),
        )
        if load:
            self.engine.initialize_from_storage()

    def reset(self) -> None:
        """Discard stored data and reseed the demo dataset."""
        self.storage.clear()
        self.engine.initialize_from_storage()

    def find_stack(self, ref: str) -> Stack:
        """Look up a stack by id, or by case-insensitive name.

        Raises:
            NotFoundError: If no stack matches.
        """
        stack = self.engine.snapshot.get_stack(ref)
        if stack:
            return stack
        matches = [s for s in self.engine.stacks if s.name.lower() == ref.lower()]
        if not matches:
            raise NotFoundError(f"Stack '{ref}' not found.")
        return matches[0]

    def find_card(self, ref: str) -> Card:
        """Look up a card by id, or by case-insensitive name.

        Raises:
            NotFoundError: If no card matches.
        """
        card = self.engine.snapshot.get_card(ref)
        if card:
            return card
        matches = [c for c in self.engine.cards if c.name.lower() == ref.lower()]
        if not matches:
            raise NotFoundError(f"Card '{ref}' not found.")
        return matches[0]
