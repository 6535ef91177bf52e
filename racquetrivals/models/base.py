from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

from racquetrivals.db.metadata import metadata_obj

# BigInteger on real databases, plain Integer on SQLite so autoincrement works.
ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    metadata = metadata_obj
