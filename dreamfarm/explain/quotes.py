from __future__ import annotations

import random
from typing import Optional, Sequence

INSPIRATIONAL_QUOTES = (
    "Your dream farm is just one plan away from reality.",
    "Small seeds of action grow into forests of abundance.",
    "The best time to start your farm was yesterday. The next best time is today.",
    "Every successful harvest begins with a single seed of determination.",
    "When you plant with purpose, you harvest with pride.",
    "The difference between a dream and a goal is a plan and a deadline.",
    "Your farming journey of a thousand miles begins with a single step.",
    "The fruits of your labor are sweeter when they grow from your own vision.",
    "Patience, persistence, and perspiration make an unbeatable combination for farming success.",
    "Your farm is limited only by your imagination and effort.",
    "Good farmers grow crops; great farmers grow possibilities.",
    "The land does not give, it only lends to those who work with it.",
)


def random_quote(rng: Optional[random.Random] = None, quotes: Sequence[str] = INSPIRATIONAL_QUOTES) -> str:
    if not quotes:
        return ""
    return (rng or random).choice(list(quotes))
