"""Round arithmetic relative to the round of 16."""

from __future__ import annotations

# log2(16): the round of 16 is this many rounds before the end of the draw.
_ROUND_OF_SIXTEEN_DEPTH = 4


def round_of_sixteen_round(size: int) -> int:
    """Return the round index at which exactly 16 slots remain.

    ``size`` must be a positive power of two of at least 16; other values are
    not validated. The result equals ``log2(size) - 3`` and is computed with
    integer bit arithmetic.

    >>> round_of_sixteen_round(64)
    3
    >>> round_of_sixteen_round(128)
    4
    """

    return (size.bit_length() - 1) - (_ROUND_OF_SIXTEEN_DEPTH - 1)


def rounds_past_round_of_sixteen(round_index: int, size: int) -> int:
    """Return how many rounds ``round_index`` lies beyond the round of 16.

    1 is a quarterfinal slot, 2 a semifinal, 3 the final and 4 the champion.
    """

    return round_index - round_of_sixteen_round(size)


__all__ = ["round_of_sixteen_round", "rounds_past_round_of_sixteen"]
