"""Tests for the SQLAlchemy-backed instrument store."""

import pytest
from sqlalchemy.exc import OperationalError

from instruments_api.core.errors import StoreFailure
from instruments_api.crud.instruments import InstrumentStore
from instruments_api.schemas.instrument import InstrumentIn, InstrumentOut


def guitar(**overrides) -> InstrumentIn:
    data = {"name": "Guitar", "type": "String", "price": 199.99, "description": "6-string"}
    data.update(overrides)
    return InstrumentIn(**data)


def test_insert_assigns_id_and_get_returns_same_record(store):
    created = store.insert(guitar())

    assert created.id == 1
    assert store.get(created.id) == created
    assert created.model_dump(exclude={"id"}) == guitar().model_dump()


def test_ids_are_unique(store):
    first = store.insert(guitar())
    second = store.insert(guitar(name="Bass"))

    assert first.id != second.id


def test_replace_overwrites_fields_and_keeps_id(store):
    created = store.insert(guitar())
    fields = InstrumentIn(name="Violin", type="Bowed", price=149.99, description="4/4 size")

    updated = store.replace(created.id, fields)

    assert updated.id == created.id
    assert store.get(created.id) == InstrumentOut(id=created.id, **fields.model_dump())


def test_remove_returns_deleted_record(store):
    created = store.insert(guitar())

    removed = store.remove(created.id)

    assert removed == created
    assert store.get(created.id) is None


@pytest.mark.parametrize("op", ["get", "remove"])
def test_missing_id_signals_absence(store, op):
    assert getattr(store, op)(999) is None


def test_replace_missing_id_signals_absence(store):
    assert store.replace(999, guitar()) is None


def test_ids_outside_64_bit_range_signal_absence(store):
    store.insert(guitar())

    for huge in (2**63, -(2**63) - 1, 10**20):
        assert store.get(huge) is None
        assert store.replace(huge, guitar()) is None
        assert store.remove(huge) is None
    assert len(store.list()) == 1


def test_list_contains_exactly_inserted_records(store):
    assert store.list() == []
    created = [store.insert(guitar(name=f"Guitar {n}")) for n in range(4)]

    listed = store.list()

    assert {item.id for item in listed} == {item.id for item in created}
    assert sorted(listed, key=lambda item: item.id) == created


def test_database_errors_become_store_failure():
    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        def rollback(self):
            self.rolled_back = True

        def close(self):
            self.closed = True

    session = BrokenSession()
    broken = InstrumentStore(lambda: session)

    with pytest.raises(StoreFailure) as exc_info:
        broken.list()

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert session.rolled_back and session.closed
