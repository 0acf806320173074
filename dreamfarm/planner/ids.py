# dreamfarm/planner/ids.py
from __future__ import annotations

import itertools
import random
import string
from typing import Callable, Optional

IdFactory = Callable[[], str]

_ALPHABET = string.digits + string.ascii_lowercase


def random_suffix(rng: Optional[random.Random] = None, length: int = 9) -> str:
    """Short base-36 id, e.g. 'k3f9a0zq1'. Unique enough within one plan."""
    rng = rng or random
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


def random_id_factory(seed: Optional[int] = None, length: int = 9) -> IdFactory:
    rng = random.Random(seed)
    return lambda: random_suffix(rng, length)


class SequentialIds:
    """Deterministic ids: 'id1', 'id2', ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
