"""
Demo dataset used when no stored snapshot exists.
"""
import random
from datetime import datetime
from typing import Optional

from stackdock.models.base import Card, CoverType, Stack
from stackdock.models.files import Snapshot
from stackdock.utils import new_cover, placeholder_image

DEMO_STACKS = ["Reading List", "Tech Articles", "Shopping"]

# (name, description, placeholder seed, index into DEMO_STACKS)
DEMO_CARDS = [
    (
        "The Future of AI",
        "An in-depth look at where artificial intelligence is heading in the next decade.",
        "ai-future",
        1,
    ),
    ("React 19 Features", "Exploring the new features coming in React 19.", "react19", 1),
    (
        "Design Systems Guide",
        "Building scalable design systems for modern applications.",
        "design-sys",
        0,
    ),
    (
        "Wireless Headphones",
        "Premium noise-canceling headphones for work and travel.",
        "headphones",
        2,
    ),
    (
        "Mechanical Keyboard",
        "A high-quality mechanical keyboard with RGB lighting.",
        "keyboard",
        2,
    ),
]


def demo_snapshot(rng: Optional[random.Random] = None) -> Snapshot:
    """Build the demo stacks and cards with fresh ids and a shared timestamp."""
    now = datetime.now()

    stacks = []
    for name in DEMO_STACKS:
        cover, cover_type = new_cover(rng)
        stacks.append(
            Stack(
                name=name,
                cover=cover,
                cover_type=CoverType(cover_type),
                created_at=now,
                updated_at=now,
            )
        )

    cards = [
        Card(
            name=name,
            description=description,
            cover=placeholder_image(seed),
            stack_id=stacks[stack_index].id,
            created_at=now,
            updated_at=now,
        )
        for name, description, seed, stack_index in DEMO_CARDS
    ]

    return Snapshot(stacks=tuple(stacks), cards=tuple(cards))
