"""
SQL persistence backend on a single key-value table.
"""

from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from seat_reservations.core.errors import StoreError
from seat_reservations.infrastructure.database import KeyValueRecord, make_engine, make_session_factory
from seat_reservations.services.interfaces.store import PersistentStore


class SqlStore(PersistentStore):
    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            engine = make_engine(database_url)
        self.engine = engine
        self.session_factory = make_session_factory(engine)

    def load(self, key: str) -> Optional[str]:
        try:
            with self.session_factory() as session:
                record = session.get(KeyValueRecord, key)
                return record.value if record else None
        except SQLAlchemyError as e:
            raise StoreError(key, str(e)) from e

    def save(self, key: str, blob: str) -> None:
        try:
            with self.session_factory.begin() as session:
                session.merge(KeyValueRecord(key=key, value=blob))
        except SQLAlchemyError as e:
            raise StoreError(key, str(e)) from e

    def close(self) -> None:
        self.engine.dispose()
