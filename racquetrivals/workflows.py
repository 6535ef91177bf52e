from typing import Optional

from sqlalchemy.orm import Session

from .config import Settings
from .events import SlotEventDispatcher
from .mail import Mailer
from .models import DrawSlot
from .prediction_window import PredictionWindowGate, RoundOfSixteenNotifier
from .scoring import ScoringEngine
from .store import SlotStore, SQLAlchemyStore


def build_slot_dispatcher(
    store: SlotStore,
    mailer: Optional[Mailer] = None,
    settings: Optional[Settings] = None,
) -> SlotEventDispatcher:
    """Return a dispatcher running the prediction-window gate, then the scoring engine.

    Parameters
    ----------
    store : SlotStore
        Record access shared by both handlers.
    mailer : Optional[Mailer]
        Delivery backend for the round of 16 notification. When omitted no
        email is sent, but the window still closes.
    settings : Optional[Settings]
        Sender identity, site URL and window length. Defaults to
        ``Settings()``; callers wanting environment values pass
        ``Settings.from_env()``.
    """

    settings = settings or Settings()
    notifier = (
        RoundOfSixteenNotifier(store, mailer, settings) if mailer is not None else None
    )

    dispatcher = SlotEventDispatcher()
    dispatcher.register(
        PredictionWindowGate(store, notifier, window=settings.prediction_window)
    )
    dispatcher.register(ScoringEngine(store))
    return dispatcher


def record_slot_result(
    session: Session,
    slot: DrawSlot,
    name: str,
    seed: Optional[str] = None,
    *,
    dispatcher: Optional[SlotEventDispatcher] = None,
    mailer: Optional[Mailer] = None,
    settings: Optional[Settings] = None,
) -> DrawSlot:
    """Record the competitor occupying ``slot`` and run the slot-update handlers.

    The workflow performs two steps:

    1. Update and commit the slot so that the handlers observe it.
    2. Fire :class:`~racquetrivals.events.SlotUpdated` with the committed slot.

    Errors raised by a handler propagate after the slot update is committed;
    the update itself is not rolled back.

    Parameters
    ----------
    session : Session
        Active SQLAlchemy session.
    slot : DrawSlot
        Persisted slot to update.
    name : str
        Competitor name; an empty string clears the slot.
    seed : Optional[str]
        New seed label. Left unchanged when omitted.
    dispatcher : Optional[SlotEventDispatcher]
        Handler chain to run. Built with :func:`build_slot_dispatcher` over a
        :class:`SQLAlchemyStore` on ``session`` when omitted.
    mailer, settings
        Forwarded to :func:`build_slot_dispatcher` when no dispatcher is given.

    Returns
    -------
    DrawSlot
        The updated slot.
    """

    if slot.id is None:
        raise ValueError("Slot must be persisted before recording a result")

    slot.name = name
    if seed is not None:
        slot.seed = seed
    session.add(slot)
    session.commit()

    if dispatcher is None:
        dispatcher = build_slot_dispatcher(SQLAlchemyStore(session), mailer, settings)
    dispatcher.on_slot_updated(slot)
    return slot
