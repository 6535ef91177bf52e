"""Database model for user predictions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, select
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship

from .base import Base, ID_TYPE

if TYPE_CHECKING:
    from .draw import DrawSlot
    from .user import User


class Prediction(Base):
    """A user's claim that a competitor reaches a given round of a draw."""

    __tablename__ = "predictions"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    """Primary key."""

    user_id: Mapped[int] = mapped_column(
        ID_TYPE, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Owner of the prediction."""

    draw_slot_id: Mapped[int] = mapped_column(
        ID_TYPE,
        ForeignKey("draw_slots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    """Slot whose result decides this prediction."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    """Predicted competitor."""

    size: Mapped[int] = mapped_column(Integer, nullable=False)
    """Size of the draw the slot belongs to, copied here for round arithmetic."""

    round: Mapped[int] = mapped_column(Integer, nullable=False)
    """Round the competitor is claimed to reach."""

    points: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    """Points currently awarded; re-derived whenever the slot changes."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    draw_slot: Mapped["DrawSlot"] = relationship(back_populates="predictions")
    user: Mapped["User"] = relationship(back_populates="predictions")

    def __init__(
        self,
        *,
        name: str,
        size: int,
        round: int,
        draw_slot: Optional["DrawSlot"] = None,
        draw_slot_id: Optional[int] = None,
        user: Optional["User"] = None,
        user_id: Optional[int] = None,
        points: int = 0,
    ) -> None:
        if draw_slot is not None:
            self.draw_slot = draw_slot
        if draw_slot_id is not None:
            self.draw_slot_id = draw_slot_id
        if user is not None:
            self.user = user
        if user_id is not None:
            self.user_id = user_id
        self.name = name
        self.size = size
        self.round = round
        self.points = points

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<Prediction(id={self.id}, user_id={self.user_id}, "
            f"draw_slot_id={self.draw_slot_id}, name='{self.name}', "
            f"round={self.round}, points={self.points})>"
        )

    @classmethod
    def for_slot(cls, session: Session, draw_slot_id: int) -> list["Prediction"]:
        """Return every prediction tied to ``draw_slot_id``."""

        return list(
            session.scalars(
                select(cls).where(cls.draw_slot_id == draw_slot_id).order_by(cls.id)
            ).all()
        )


__all__ = ["Prediction"]
