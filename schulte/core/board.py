from __future__ import annotations

import random
from typing import List, Optional

MIN_GRID_SIZE = 2


def shuffle_in_place(values: List[int], rng: Optional[random.Random] = None) -> None:
    """Fisher-Yates shuffle, walking from the last index down to 1."""
    rand = rng or random
    for i in range(len(values) - 1, 0, -1):
        j = rand.randint(0, i)
        values[i], values[j] = values[j], values[i]


def generate_board(grid_size: int, rng: Optional[random.Random] = None) -> List[int]:
    """Return the numbers 1..grid_size² in shuffled render order."""
    if grid_size < MIN_GRID_SIZE:
        raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}, got {grid_size}")
    numbers = list(range(1, grid_size * grid_size + 1))
    shuffle_in_place(numbers, rng)
    return numbers
