from __future__ import annotations

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pod_league.domain.achievement import Achievement


def roll_active_achievements(
    achievements: Sequence[Achievement],
    random_per_week: int,
    *,
    rng: random.Random | None = None,
) -> list[Achievement]:
    """Every always-on achievement plus a random sample of the others.

    Asking for more random achievements than exist returns all of them.
    """
    always_on = [a for a in achievements if a.always_on]
    candidates = [a for a in achievements if not a.always_on]
    sample_count = min(max(random_per_week, 0), len(candidates))
    sample = (rng or random.Random()).sample(candidates, sample_count)
    return always_on + sample
