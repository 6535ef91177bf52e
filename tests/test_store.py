import unittest
from datetime import datetime, timedelta, timezone

from racquetrivals.db.utils import as_utc
from racquetrivals.exceptions import (
    FilterSyntaxError,
    RecordNotFoundError,
    StoreWriteError,
)
from racquetrivals.models import Draw, DrawSlot, Prediction, User
from racquetrivals.store import SQLAlchemyStore, compile_filter

from bracket_fixtures import R16_ROUND, make_sessionmaker, seed_draw


class FilterCompilerTests(unittest.TestCase):
    def test_empty_expression_has_no_clauses(self):
        self.assertEqual(compile_filter(DrawSlot, ""), [])
        self.assertEqual(compile_filter(DrawSlot, "   "), [])

    def test_conjunction_compiles_one_clause_per_field(self):
        clauses = compile_filter(DrawSlot, 'draw_id="1"&&round=3&&name!=""')
        self.assertEqual(len(clauses), 3)

    def test_unknown_field_is_rejected(self):
        with self.assertRaises(FilterSyntaxError):
            compile_filter(DrawSlot, 'colour="red"')

    def test_malformed_expressions_are_rejected(self):
        for expr in ['name==""', 'name="x"&&', 'name=x', '&&name=""', 'round="three"']:
            with self.subTest(expr=expr):
                with self.assertRaises(FilterSyntaxError):
                    compile_filter(DrawSlot, expr)

    def test_filter_syntax_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            compile_filter(User, "email")


class SQLAlchemyStoreTests(unittest.TestCase):
    def setUp(self):
        self.engine, self.Session = make_sessionmaker()

    def tearDown(self):
        self.engine.dispose()

    def test_get_by_id_returns_record(self):
        with self.Session() as session:
            draw = seed_draw(session)
            store = SQLAlchemyStore(session)
            self.assertIs(store.get_by_id(Draw, draw.id), draw)

    def test_get_by_id_missing_raises_not_found(self):
        with self.Session() as session:
            store = SQLAlchemyStore(session)
            with self.assertRaises(RecordNotFoundError) as ctx:
                store.get_by_id(Draw, 404)
            self.assertEqual(ctx.exception.model_name, "Draw")
            self.assertEqual(ctx.exception.record_id, 404)
            self.assertIsInstance(ctx.exception, LookupError)

    def test_list_by_filter_counts_named_round_of_sixteen_slots(self):
        with self.Session() as session:
            draw = seed_draw(session, named_r16=14)
            other = seed_draw(session, named_r16=16)
            store = SQLAlchemyStore(session)

            filled = store.list_by_filter(
                DrawSlot, f'draw_id="{draw.id}"&&round="{R16_ROUND}"&&name!=""'
            )
            self.assertEqual(len(filled), 14)
            self.assertTrue(all(s.draw_id == draw.id for s in filled))

            empty = store.list_by_filter(
                DrawSlot, f'draw_id={other.id}&&round={R16_ROUND}&&name=""'
            )
            self.assertEqual(empty, [])

    def test_list_by_filter_sort_limit_offset(self):
        with self.Session() as session:
            draw = seed_draw(session)
            store = SQLAlchemyStore(session)

            slots = store.list_by_filter(
                DrawSlot,
                f'draw_id={draw.id}&&round={R16_ROUND}',
                sort="-position",
                limit=3,
                offset=1,
            )
            self.assertEqual([s.position for s in slots], [14, 13, 12])

    def test_list_by_filter_excludes_users_without_email(self):
        with self.Session() as session:
            session.add_all(
                [
                    User("alice", email="alice@example.com"),
                    User("nomail"),
                    User("blank", email="   "),
                ]
            )
            session.commit()
            store = SQLAlchemyStore(session)

            users = store.list_by_filter(User, 'email!=""')
            self.assertEqual([u.username for u in users], ["alice"])

    def test_quoted_values(self):
        with self.Session() as session:
            draw = seed_draw(session)
            store = SQLAlchemyStore(session)

            found = store.list_by_filter(Draw, "event=\"Queen's Club\"")
            self.assertEqual([d.id for d in found], [draw.id])
            found = store.list_by_filter(Draw, "event='Queen\\'s Club'")
            self.assertEqual([d.id for d in found], [draw.id])

    def test_save_persists_and_commits(self):
        with self.Session() as session:
            draw = seed_draw(session)
            slot = DrawSlot.get_cell(session, draw.id, R16_ROUND + 1, 0)
            user = User("alice", email="alice@example.com")
            session.add(user)
            session.commit()

            store = SQLAlchemyStore(session)
            prediction = Prediction(
                name="Swiatek", size=64, round=4, draw_slot=slot, user=user
            )
            store.save(prediction)
            self.assertIsNotNone(prediction.id)

            session.rollback()
            self.assertEqual(Prediction.for_slot(session, slot.id), [prediction])

    def test_save_failure_raises_store_write_error(self):
        with self.Session() as session:
            store = SQLAlchemyStore(session)
            session.add(User("alice"))
            session.commit()

            with self.assertRaises(StoreWriteError):
                store.save(User("alice"))
            # The session is usable again after the failed write.
            self.assertIsNotNone(User.get_by_username(session, "alice"))

    def test_close_prediction_window_is_compare_and_set(self):
        with self.Session() as session:
            draw = seed_draw(session)
            store = SQLAlchemyStore(session)
            first = datetime.now(timezone.utc) + timedelta(hours=12)

            self.assertTrue(store.close_prediction_window(draw, first))
            self.assertEqual(as_utc(draw.prediction_close), first)

            later = first + timedelta(hours=1)
            self.assertFalse(store.close_prediction_window(draw, later))
            self.assertEqual(as_utc(draw.prediction_close), first)


if __name__ == "__main__":
    unittest.main()
