"""Slot-update event and its ordered handler chain."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .models import DrawSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlotUpdated:
    """A draw slot update has been committed.

    Attributes
    ----------
    slot : DrawSlot
        Post-commit snapshot of the updated slot.
    """

    slot: DrawSlot


SlotHandler = Callable[[SlotUpdated], Any]


class SlotEventDispatcher:
    """Runs registered handlers one after another for every slot update.

    Handlers do not share state; each reads what it needs from the store. The
    first handler that raises stops the chain and the error propagates to the
    caller.
    """

    def __init__(self, handlers: Optional[list[SlotHandler]] = None) -> None:
        self._handlers: list[SlotHandler] = list(handlers or [])

    @property
    def handlers(self) -> list[SlotHandler]:
        return list(self._handlers)

    def register(self, handler: SlotHandler) -> SlotHandler:
        """Append ``handler`` to the chain and return it (usable as a decorator)."""
        self._handlers.append(handler)
        return handler

    def dispatch(self, event: SlotUpdated) -> list[Any]:
        """Deliver ``event`` to every handler in registration order.

        Returns the handlers' return values in the same order.
        """

        results: list[Any] = []
        for handler in self._handlers:
            logger.debug(
                f"Dispatching slot {event.slot.id} update to "
                f"{getattr(handler, '__qualname__', type(handler).__name__)}"
            )
            results.append(handler(event))
        return results

    def on_slot_updated(self, slot: DrawSlot) -> list[Any]:
        """Entry point for the hosting pipeline, called once per committed update."""
        return self.dispatch(SlotUpdated(slot=slot))


__all__ = ["SlotUpdated", "SlotHandler", "SlotEventDispatcher"]
