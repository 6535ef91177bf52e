"""Seed a development database with one 64-player draw.

Only the round of 16 onward is seeded. 14 of its 16 slots are named, so
recording two more results closes the prediction window.
"""

import logging

from racquetrivals.db.engine import get_sessionmaker, make_engine
from racquetrivals.models import Base, Draw, DrawSlot, Prediction, User
from racquetrivals.scoring import round_of_sixteen_round

logger = logging.getLogger(__name__)

DRAW_SIZE = 64
ROUND_OF_SIXTEEN = [
    "Swiatek", "Kasatkina", "Andreeva", "Paolini", "Sabalenka", "Svitolina",
    "Gauff", "Keys", "Pegula", "Zheng", "Navarro", "Kostyuk", "Jabeur",
    "Collins", "Mertens", "Rybakina",
]


def main() -> None:
    """Reset the schema and insert the sample draw, users and predictions."""
    engine = make_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    Session = get_sessionmaker(engine)

    r16 = round_of_sixteen_round(DRAW_SIZE)

    with Session.begin() as session:
        draw = Draw(name="WTA", event="Queen's Club", year=2024, size=DRAW_SIZE)
        session.add(draw)
        session.flush()

        # Earlier rounds are not needed by the handlers; start at the round of 16.
        for round_index in range(r16, r16 + 5):
            for position in range(16 >> (round_index - r16)):
                name = ""
                if round_index == r16 and position < 14:
                    name = ROUND_OF_SIXTEEN[position]
                session.add(
                    DrawSlot(
                        draw_id=draw.id,
                        round=round_index,
                        position=position,
                        name=name,
                    )
                )
        session.flush()

        alice = User("alice", email="alice@example.com")
        bob = User("bob", email="bob@example.com")
        session.add_all([alice, bob])
        session.flush()

        qf_slot = DrawSlot.get_cell(session, draw.id, r16 + 1, 2)
        if qf_slot is None:
            raise RuntimeError(f"Draw {draw.id} has no quarterfinal slot at position 2")
        session.add_all(
            [
                Prediction(name="Sabalenka", size=DRAW_SIZE, round=r16 + 1,
                           draw_slot=qf_slot, user=alice),
                Prediction(name="Svitolina", size=DRAW_SIZE, round=r16 + 1,
                           draw_slot=qf_slot, user=bob),
            ]
        )

    logger.info("Seeded draw with 14/16 round of 16 slots named")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
