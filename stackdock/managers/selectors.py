"""
View-facing selectors.

Pure queries over a snapshot. They never cache, so they always reflect the
snapshot they are given.
"""
from typing import Dict, List

from stackdock.models.base import Card
from stackdock.models.files import Snapshot


def cards_for_stack(snapshot: Snapshot, stack_id: str) -> List[Card]:
    """Return the cards whose stack_id equals stack_id, in snapshot order."""
    return [c for c in snapshot.cards if c.stack_id == stack_id]


def card_count(snapshot: Snapshot, stack_id: str) -> int:
    """Return the number of cards in a stack."""
    return sum(1 for c in snapshot.cards if c.stack_id == stack_id)


def card_counts(snapshot: Snapshot) -> Dict[str, int]:
    """Return card counts for every stack in the snapshot, including empty ones."""
    counts = {s.id: 0 for s in snapshot.stacks}
    for card in snapshot.cards:
        if card.stack_id in counts:
            counts[card.stack_id] += 1
    return counts


def dangling_cards(snapshot: Snapshot) -> List[Card]:
    """Return cards whose stack_id names no stack in the snapshot."""
    stack_ids = {s.id for s in snapshot.stacks}
    return [c for c in snapshot.cards if c.stack_id not in stack_ids]
