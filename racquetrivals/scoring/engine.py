"""Scoring engine: re-derives prediction points whenever a slot changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .points import award_points
from ..events import SlotUpdated
from ..models import Prediction
from ..store import SlotStore

logger = logging.getLogger(__name__)


@dataclass
class PredictionScore:
    """Outcome of scoring a single prediction.

    Attributes
    ----------
    prediction : Prediction
        The prediction that was scored.
    points : int
        Points the prediction is worth after this evaluation.
    changed : bool
        ``True`` when the stored value differed and was written.
    """

    prediction: Prediction
    points: int
    changed: bool


class ScoringEngine:
    """Recomputes the points of every prediction tied to an updated slot.

    Points are a pure function of the slot's current name and the
    prediction's own fields, so replaying or reordering slot events converges
    to the same values. Unchanged predictions are never written.
    """

    def __init__(self, store: SlotStore) -> None:
        self._store = store

    def __call__(self, event: SlotUpdated) -> list[PredictionScore]:
        return self.handle(event)

    def handle(self, event: SlotUpdated) -> list[PredictionScore]:
        """Score the predictions of ``event.slot`` and persist changed values.

        Returns
        -------
        list[PredictionScore]
            One entry per prediction tied to the slot; empty when there are none.

        Raises
        ------
        StoreWriteError
            If persisting a prediction fails. Predictions saved earlier in the
            same call stay saved; the remaining ones are not processed.
        """

        slot = event.slot
        slot_name = slot.name or ""

        predictions = self._store.list_by_filter(
            Prediction, f'draw_slot_id="{slot.id}"'
        )
        if not predictions:
            return []

        scores: list[PredictionScore] = []
        for prediction in predictions:
            points = award_points(
                slot_name,
                prediction.name,
                prediction.round,
                prediction.size,
            )

            if points == prediction.points:
                scores.append(PredictionScore(prediction, points, changed=False))
                continue

            logger.info(
                f"Prediction {prediction.id} on slot {slot.id}: "
                f"{prediction.points} -> {points} points"
            )
            prediction.points = points
            self._store.save(prediction)
            scores.append(PredictionScore(prediction, points, changed=True))

        return scores


__all__ = ["PredictionScore", "ScoringEngine"]
