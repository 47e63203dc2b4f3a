from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round halves up, unlike the builtin ``round``."""
    return int(math.floor(value + 0.5))
