"""Reservoir sampling over candidate streams of unknown length."""

import random
from typing import Iterable, List, Optional, TypeVar

from ..errors import SamplingPreconditionError

T = TypeVar("T")


def sample(items: Iterable[T], k: int, rng: Optional[random.Random] = None) -> List[T]:
    """
    Draw a uniform random sample of ``k`` items in a single pass (Algorithm R).

    Every item ends up in the result with probability ``k/n`` and no item is
    picked twice. Only ``k`` items are held in memory, so ``items`` may be a
    generator of unknown length. When ``k >= n`` all items are returned in
    input order.

    Args:
        items: Any iterable of candidates
        k: Sample size, must be >= 0
        rng: Random source (module-level ``random`` if not provided)

    Returns:
        List of ``min(k, n)`` items
    """
    if k < 0:
        raise SamplingPreconditionError(f"Sample size must be >= 0, got {k}")

    randint = (rng or random).randint
    reservoir: List[T] = []

    if k == 0:
        return reservoir

    for i, item in enumerate(items):
        if i < k:
            reservoir.append(item)
            continue
        j = randint(0, i)
        if j < k:
            reservoir[j] = item

    return reservoir
