"""
Utility functions for the stackdock application.

Identifier and cover generation for new entities, plus small formatting
helpers used by the command line.
"""

import random
import uuid
from datetime import datetime
from typing import Optional, Tuple
from urllib.parse import quote

from stackdock.constants import (
    DEFAULT_GRADIENT_PROBABILITY,
    GRADIENT_PALETTES,
    PLACEHOLDER_IMAGE_URL,
    SOLID_COLORS,
)


def new_id() -> str:
    """Return a fresh unique identifier."""
    return str(uuid.uuid4())


def generate_gradient(rng: Optional[random.Random] = None) -> str:
    """
    Build a CSS linear gradient from the curated palette.

    Args:
        rng: Random source. Defaults to the module-level generator.

    Returns:
        A string such as ``linear-gradient(135deg, #667eea, #764ba2)``.
    """
    rng = rng or random
    start, end = rng.choice(GRADIENT_PALETTES)
    angle = rng.randrange(360)
    return f"linear-gradient({angle}deg, {start}, {end})"


def generate_color(rng: Optional[random.Random] = None) -> str:
    """Pick a solid color from the curated palette."""
    rng = rng or random
    return rng.choice(SOLID_COLORS)


def new_cover(
    rng: Optional[random.Random] = None,
    gradient_probability: float = DEFAULT_GRADIENT_PROBABILITY,
) -> Tuple[str, str]:
    """
    Generate a cover for a new stack.

    Args:
        rng: Random source. Defaults to the module-level generator.
        gradient_probability: Chance of producing a gradient instead of a
            solid color.

    Returns:
        A ``(cover, cover_type)`` tuple where cover_type is "gradient" or "color".
    """
    rng = rng or random
    if rng.random() < gradient_probability:
        return generate_gradient(rng), "gradient"
    return generate_color(rng), "color"


def placeholder_image(seed: str) -> str:
    """
    Return a placeholder image URL for a card.

    Examples:
        >>> placeholder_image("keyboard")
        'https://picsum.photos/seed/keyboard/400/300'
    """
    return PLACEHOLDER_IMAGE_URL.format(seed=quote(seed, safe=""))


def truncate_text(text: str, max_length: int) -> str:
    """
    Shorten text to max_length characters, ending with an ellipsis.

    Args:
        text: Text to shorten.
        max_length: Maximum length of the result, ellipsis included.

    Returns:
        The original text if short enough, otherwise a truncated copy.
    """
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."


def format_date(date: datetime) -> str:
    """
    Format a timestamp for display, e.g. "Jan 5, 2025".

    Args:
        date: The datetime object to format.

    Returns:
        Short month, day and year.
    """
    return f"{date.strftime('%b')} {date.day}, {date.year}"
