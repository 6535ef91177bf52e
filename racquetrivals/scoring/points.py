"""Point awards for predictions."""

from __future__ import annotations

from typing import Mapping

from .rounds import rounds_past_round_of_sixteen

QUARTERFINAL = 1
SEMIFINAL = 2
FINAL = 3
CHAMPION = 4

ROUND_POINTS: Mapping[int, int] = {
    QUARTERFINAL: 1,
    SEMIFINAL: 2,
    FINAL: 4,
    CHAMPION: 8,
}
"""Points keyed by rounds past the round of 16."""


def names_match(slot_name: str, predicted_name: str) -> bool:
    """Return whether a decided ``slot_name`` is found in ``predicted_name``.

    The comparison is a case-sensitive substring test so that a pick stored
    with an annotation such as ``"Sabalenka (1)"`` still matches the slot
    ``"Sabalenka"``. A short slot name contained in a longer pick matches as
    well. An empty pick never matches a decided slot.
    """

    return slot_name != "" and slot_name in predicted_name


def award_points(
    slot_name: str,
    predicted_name: str,
    prediction_round: int,
    prediction_size: int,
) -> int:
    """Return the points a prediction is worth given the slot's current name.

    Parameters
    ----------
    slot_name : str
        Competitor currently recorded in the slot; empty when undecided.
    predicted_name : str
        Competitor picked by the user.
    prediction_round : int
        Round the pick claims the competitor reaches.
    prediction_size : int
        Size of the draw, used to locate the round of 16.

    Returns
    -------
    int
        0, 1, 2, 4 or 8.
    """

    if not names_match(slot_name, predicted_name):
        return 0
    delta = rounds_past_round_of_sixteen(prediction_round, prediction_size)
    return ROUND_POINTS.get(delta, 0)


__all__ = [
    "QUARTERFINAL",
    "SEMIFINAL",
    "FINAL",
    "CHAMPION",
    "ROUND_POINTS",
    "award_points",
    "names_match",
]
