"""Persistence of instrument records in the ``instruments`` table."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..core.errors import StoreFailure
from ..models.instrument import Instrument
from ..schemas.instrument import InstrumentIn, InstrumentOut

logger = logging.getLogger(__name__)

# SQLite INTEGER (and BIGINT elsewhere) is signed 64-bit; no row can have an id outside it.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _storable_id(instrument_id: int) -> bool:
    return MIN_ID <= instrument_id <= MAX_ID


class InstrumentStore:
    """CRUD access to instruments.

    Each call opens its own session from ``session_factory`` so one store can
    serve concurrent requests. Records come back as ``InstrumentOut`` rather
    than live ORM objects.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(
                "store.%s failed", operation, extra={"extra_data": {"operation": operation}}
            )
            raise StoreFailure(f"{operation} failed") from exc
        finally:
            db.close()

    def list(self) -> list[InstrumentOut]:
        with self._session("list") as db:
            rows = db.execute(select(Instrument).order_by(Instrument.id)).scalars().all()
            return [InstrumentOut.model_validate(row) for row in rows]

    def get(self, instrument_id: int) -> InstrumentOut | None:
        if not _storable_id(instrument_id):
            return None
        with self._session("get") as db:
            row = db.get(Instrument, instrument_id)
            return InstrumentOut.model_validate(row) if row else None

    def insert(self, fields: InstrumentIn) -> InstrumentOut:
        with self._session("insert") as db:
            row = Instrument(**fields.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info("instrument.created", extra={"extra_data": {"instrument_id": row.id}})
            return InstrumentOut.model_validate(row)

    def replace(self, instrument_id: int, fields: InstrumentIn) -> InstrumentOut | None:
        if not _storable_id(instrument_id):
            return None
        with self._session("replace") as db:
            row = db.get(Instrument, instrument_id)
            if row is None:
                return None
            for key, value in fields.model_dump().items():
                setattr(row, key, value)
            db.commit()
            db.refresh(row)
            return InstrumentOut.model_validate(row)

    def remove(self, instrument_id: int) -> InstrumentOut | None:
        if not _storable_id(instrument_id):
            return None
        with self._session("remove") as db:
            row = db.get(Instrument, instrument_id)
            if row is None:
                return None
            # Snapshot before the row goes away.
            removed = InstrumentOut.model_validate(row)
            db.delete(row)
            db.commit()
            logger.info("instrument.deleted", extra={"extra_data": {"instrument_id": instrument_id}})
            return removed
