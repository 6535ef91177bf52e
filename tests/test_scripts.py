import importlib.util
import unittest
from pathlib import Path
from unittest.mock import patch

from sqlalchemy import func, select

from racquetrivals.db.engine import get_sessionmaker, make_engine
from racquetrivals.models import Base, DrawSlot, Prediction

SCRIPTS_DIR = Path(__file__).resolve().parents[1] / "scripts"


def load_script(name):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class SeedDevTests(unittest.TestCase):
    def setUp(self):
        self.seed_dev = load_script("seed_dev")
        self.engine = make_engine("sqlite+pysqlite:///:memory:")

    def tearDown(self):
        self.engine.dispose()

    def test_seeds_fourteen_named_round_of_sixteen_slots(self):
        with patch.object(self.seed_dev, "make_engine", return_value=self.engine):
            self.seed_dev.main()

        with get_sessionmaker(self.engine)() as session:
            named = session.scalar(
                select(func.count(DrawSlot.id)).where(
                    DrawSlot.round == 3, DrawSlot.name != ""
                )
            )
            self.assertEqual(named, 14)
            self.assertEqual(session.scalar(select(func.count(Prediction.id))), 2)

    def test_missing_quarterfinal_slot_raises(self):
        with patch.object(self.seed_dev, "make_engine", return_value=self.engine), \
                patch.object(DrawSlot, "get_cell", return_value=None):
            with self.assertRaises(RuntimeError):
                self.seed_dev.main()


class InitDbTests(unittest.TestCase):
    def setUp(self):
        self.init_db = load_script("init_db")

    def test_missing_tables_lists_absent_model_tables(self):
        engine = make_engine("sqlite+pysqlite:///:memory:")
        with patch.object(self.init_db, "make_engine", return_value=engine):
            self.assertEqual(
                self.init_db.missing_tables(), sorted(Base.metadata.tables)
            )

    def test_missing_tables_empty_after_create(self):
        engine = make_engine("sqlite+pysqlite:///:memory:")
        Base.metadata.create_all(engine)
        with patch.object(self.init_db, "make_engine", return_value=engine):
            self.assertEqual(self.init_db.missing_tables(), [])

    def test_main_fails_when_tables_are_missing(self):
        with patch.object(self.init_db, "upgrade_db"), \
                patch.object(self.init_db, "missing_tables", return_value=["draws"]):
            with self.assertLogs("init_db", level="ERROR"):
                self.assertEqual(self.init_db.main(), 1)


if __name__ == "__main__":
    unittest.main()
