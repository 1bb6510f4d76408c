from __future__ import annotations

import re

from ..core.errors import InstrumentNotFound, InvalidIdentifier
from ..crud.instruments import InstrumentStore
from ..schemas.instrument import InstrumentIn, InstrumentOut

_IDENTIFIER_RE = re.compile(r"-?[0-9]+")


def parse_identifier(raw: str) -> int:
    """Turn a path segment into an instrument id or raise ``InvalidIdentifier``."""

    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if not isinstance(raw, str) or not _IDENTIFIER_RE.fullmatch(raw):
        raise InvalidIdentifier(raw)
    return int(raw)


class InstrumentService:
    """Glue between the HTTP layer and ``InstrumentStore``."""

    def __init__(self, store: InstrumentStore) -> None:
        self.store = store

    def list_instruments(self) -> list[InstrumentOut]:
        return self.store.list()

    def get_instrument(self, raw_id: str) -> InstrumentOut:
        instrument_id = parse_identifier(raw_id)
        found = self.store.get(instrument_id)
        if found is None:
            raise InstrumentNotFound(instrument_id)
        return found

    def create_instrument(self, fields: InstrumentIn) -> InstrumentOut:
        return self.store.insert(fields)

    def replace_instrument(self, raw_id: str, fields: InstrumentIn) -> InstrumentOut:
        instrument_id = parse_identifier(raw_id)
        updated = self.store.replace(instrument_id, fields)
        if updated is None:
            raise InstrumentNotFound(instrument_id)
        return updated

    def delete_instrument(self, raw_id: str) -> InstrumentOut:
        instrument_id = parse_identifier(raw_id)
        removed = self.store.remove(instrument_id)
        if removed is None:
            raise InstrumentNotFound(instrument_id)
        return removed
