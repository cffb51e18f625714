from typing import Sequence


def manhattan(s: Sequence[int]) -> int:
    """Sum over non-blank tiles of row + column distance to the tile's goal cell (tile v belongs at index v-1)."""
    dist = 0
    for idx, tile in enumerate(s):
        if tile == 0:
            continue
        r1, c1 = divmod(idx, 3)
        r2, c2 = divmod(tile - 1, 3)
        dist += abs(r1 - r2) + abs(c1 - c2)
    return dist
