"""Prediction-window gate: closes predictions once the round of 16 is named."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .notifications import NotificationReport, RoundOfSixteenNotifier
from ..events import SlotUpdated
from ..models import Draw, DrawSlot
from ..scoring.rounds import round_of_sixteen_round
from ..store import SlotStore

logger = logging.getLogger(__name__)

ROUND_OF_SIXTEEN_SLOTS = 16
DEFAULT_PREDICTION_WINDOW = timedelta(hours=12)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PredictionWindowGate:
    """Stamps ``Draw.prediction_close`` the first time all 16 round-of-16 slots are named.

    The transition happens at most once per draw. Only the invocation that
    performs it notifies users.
    """

    def __init__(
        self,
        store: SlotStore,
        notifier: Optional[RoundOfSixteenNotifier] = None,
        *,
        window: timedelta = DEFAULT_PREDICTION_WINDOW,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Create a gate bound to a store.

        Parameters
        ----------
        store : SlotStore
            Record access for draws and slots.
        notifier : Optional[RoundOfSixteenNotifier], default: None
            Sends the "time to make your picks" emails. When omitted the gate
            only closes the window.
        window : timedelta, default: 12 hours
            Time between the round of 16 filling up and predictions closing.
        clock : Callable[[], datetime]
            Returns the current aware datetime.
        """

        self._store = store
        self._notifier = notifier
        self._window = window
        self._clock = clock
        self.last_report: Optional[NotificationReport] = None

    def __call__(self, event: SlotUpdated) -> Optional[datetime]:
        return self.handle(event)

    def handle(self, event: SlotUpdated) -> Optional[datetime]:
        """React to a committed slot update.

        Returns
        -------
        Optional[datetime]
            The new ``prediction_close`` when this call closed the window,
            otherwise ``None``.

        Raises
        ------
        RecordNotFoundError
            If the slot's draw does not exist.
        StoreWriteError
            If the draw cannot be updated.
        """

        slot = event.slot
        if not slot.name:
            return None

        draw = self._store.get_by_id(Draw, slot.draw_id)
        if draw.prediction_close is not None:
            return None

        r16_round = round_of_sixteen_round(draw.size)
        if slot.round != r16_round:
            return None

        filled = self._store.list_by_filter(
            DrawSlot, f'draw_id="{draw.id}"&&round="{r16_round}"&&name!=""'
        )
        if len(filled) != ROUND_OF_SIXTEEN_SLOTS:
            logger.debug(
                f"Draw {draw.id}: {len(filled)}/{ROUND_OF_SIXTEEN_SLOTS} "
                "round of 16 slots named"
            )
            return None

        close_at = self._clock() + self._window
        if not self._store.close_prediction_window(draw, close_at):
            # A concurrent update closed the window first and notified users.
            logger.info(f"Draw {draw.id}: prediction window already closed")
            return None

        logger.info(f"Draw {draw.id}: predictions close at {close_at.isoformat()}")

        if self._notifier is not None:
            self.last_report = self._notifier.notify(draw)
        return close_at


__all__ = ["PredictionWindowGate", "ROUND_OF_SIXTEEN_SLOTS", "DEFAULT_PREDICTION_WINDOW"]
