"""Database models for tournament draws and their bracket slots."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    select,
)
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, validates

from .base import Base, ID_TYPE

if TYPE_CHECKING:
    from .prediction import Prediction


class Draw(Base):
    """A single-elimination tournament bracket of a fixed power-of-two size."""

    __tablename__ = "draws"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    """Primary key."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    """Display name of the draw, e.g. ``"WTA"``."""

    event: Mapped[str] = mapped_column(String(100), nullable=False)
    """Event label, e.g. ``"Queen's Club"``."""

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    """Calendar year the event is played in."""

    size: Mapped[int] = mapped_column(Integer, nullable=False)
    """Number of first-round slots; always a power of two."""

    prediction_close: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    """Deadline for submitting predictions. Set once, when the round of 16 fills."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    slots: Mapped[list["DrawSlot"]] = relationship(
        back_populates="draw",
        cascade="all, delete-orphan",
        order_by="[DrawSlot.round, DrawSlot.position]",
    )
    """Every bracket cell belonging to this draw."""

    def __init__(
        self,
        *,
        name: str,
        event: str,
        year: int,
        size: int,
        prediction_close: Optional[datetime] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> None:
        self.name = name
        self.event = event
        self.year = year
        self.size = size
        if prediction_close is not None:
            self.prediction_close = prediction_close
        if created_at is not None:
            self.created_at = created_at
        if updated_at is not None:
            self.updated_at = updated_at

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<Draw(id={self.id}, name='{self.name}', event='{self.event}', "
            f"year={self.year}, size={self.size}, "
            f"prediction_close={self.prediction_close})>"
        )

    @validates("prediction_close")
    def _freeze_prediction_close(
        self, _key: str, value: Optional[datetime]
    ) -> Optional[datetime]:
        current = self.__dict__.get("prediction_close")
        if current is not None and value != current:
            raise ValueError("prediction_close cannot be changed once it is set")
        return value

    def slots_in_round(self, session: Session, round_index: int) -> list["DrawSlot"]:
        """Return the slots of ``round_index`` ordered by position."""

        stmt = (
            select(DrawSlot)
            .where(DrawSlot.draw_id == self.id, DrawSlot.round == round_index)
            .order_by(DrawSlot.position.asc())
        )
        return list(session.scalars(stmt).all())


class DrawSlot(Base):
    """One bracket cell: which competitor occupies a (round, position)."""

    __tablename__ = "draw_slots"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    """Primary key."""

    draw_id: Mapped[int] = mapped_column(
        ID_TYPE, ForeignKey("draws.id", ondelete="CASCADE"), nullable=False, index=True
    )
    """Foreign key referencing :class:`Draw`."""

    round: Mapped[int] = mapped_column(Integer, nullable=False)
    """Round index; 0 is the first round, increasing toward the final."""

    position: Mapped[int] = mapped_column(Integer, nullable=False)
    """Position of the slot within its round."""

    name: Mapped[str] = mapped_column(
        String(100), nullable=False, default="", server_default=""
    )
    """Competitor occupying the slot; empty until decided."""

    seed: Mapped[str] = mapped_column(
        String(20), nullable=False, default="", server_default=""
    )
    """Seed label shown next to the competitor (``"1"``, ``"WC"``, ...)."""

    draw: Mapped["Draw"] = relationship(back_populates="slots")

    predictions: Mapped[list["Prediction"]] = relationship(
        back_populates="draw_slot",
        cascade="all, delete-orphan",
    )
    """Predictions scored against this slot."""

    __table_args__ = (
        UniqueConstraint("draw_id", "round", "position", name="uq_draw_slot_cell"),
        Index("ix_draw_slots_draw_round", "draw_id", "round"),
    )

    def __init__(
        self,
        *,
        round: int,
        position: int,
        draw: Optional["Draw"] = None,
        draw_id: Optional[int] = None,
        name: str = "",
        seed: str = "",
    ) -> None:
        if draw is not None:
            self.draw = draw
        if draw_id is not None:
            self.draw_id = draw_id
        self.round = round
        self.position = position
        self.name = name
        self.seed = seed

    def __repr__(self) -> str:  # pragma: no cover - repr is trivial
        return (
            f"<DrawSlot(id={self.id}, draw_id={self.draw_id}, round={self.round}, "
            f"position={self.position}, name='{self.name}')>"
        )

    @property
    def is_decided(self) -> bool:
        return self.name != ""

    @classmethod
    def get_cell(
        cls, session: Session, draw_id: int, round_index: int, position: int
    ) -> Optional["DrawSlot"]:
        """Return the slot at ``(round_index, position)`` in ``draw_id``."""

        return session.scalar(
            select(cls).where(
                cls.draw_id == draw_id,
                cls.round == round_index,
                cls.position == position,
            )
        )


__all__ = ["Draw", "DrawSlot"]
