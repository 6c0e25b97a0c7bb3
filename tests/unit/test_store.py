import threading

import pytest

from forest_fires_api.app.core.db import DuplicateKeyError, ForestFireStore, RecordQuery
from tests.conftest import make_record


def _years(records):
    return [record["year"] for record in records]


def test_insert_and_find_one(store):
    store.insert(make_record(2024, "andalucia", 10034, 0.39))
    assert store.find_one(2024, "andalucia") == {
        "year": 2024,
        "autonomous_community": "andalucia",
        "number_of_accidents": 10034,
        "percentage_of_large_fires": 0.39,
    }
    assert store.find_one(2024, "aragon") is None


def test_records_never_expose_row_id(store):
    store.insert(make_record())
    assert "id" not in store.find()[0]


def test_duplicate_key_is_rejected(store):
    store.insert(make_record(2024, "aragon"))
    with pytest.raises(DuplicateKeyError):
        store.insert(make_record(2024, "aragon", accidents=1))
    assert store.count() == 1


def test_find_keeps_insertion_order(store):
    for year in (2010, 2001, 2020, 2005):
        store.insert(make_record(year))
    assert _years(store.find()) == [2010, 2001, 2020, 2005]


def test_year_range_is_inclusive(store):
    for year in range(2005, 2026):
        store.insert(make_record(year))
    records = store.find(RecordQuery(year_from=2010, year_to=2020))
    assert _years(records) == list(range(2010, 2021))


def test_offset_and_limit(store):
    for year in range(2000, 2010):
        store.insert(make_record(year))
    assert _years(store.find(RecordQuery(offset=2, limit=3))) == [2002, 2003, 2004]
    assert _years(store.find(RecordQuery(offset=8))) == [2008, 2009]
    assert _years(store.find(RecordQuery(limit=2))) == [2000, 2001]


def test_equality_filters_combine_with_range(store):
    store.insert(make_record(2006, "aragon"))
    store.insert(make_record(2016, "aragon"))
    store.insert(make_record(2016, "ceuta"))
    query = RecordQuery(equals={"autonomous_community": "aragon"}, year_from=2010)
    assert store.find(query) == [make_record(2016, "aragon")]


def test_unknown_field_matches_nothing(store):
    store.insert(make_record())
    assert store.find(RecordQuery(equals={"province": "huelva"})) == []
    assert store.count(RecordQuery(equals={"province": "huelva"})) == 0
    assert store.remove(RecordQuery(equals={"province": "huelva"})) == 0


def test_value_of_wrong_type_matches_nothing(store):
    store.insert(make_record(2024, "123"))
    assert store.find(RecordQuery(equals={"autonomous_community": 123})) == []
    assert store.find(RecordQuery(equals={"year": "2024"})) == []


def test_update_changes_only_counts(store):
    store.insert(make_record(2024, "ceuta", 7, 0))
    changed = store.update(2024, "ceuta", {"number_of_accidents": 8, "year": 1999})
    assert changed == 1
    assert store.find_one(2024, "ceuta")["number_of_accidents"] == 8
    assert store.find_one(1999, "ceuta") is None
    assert store.update(2025, "ceuta", {"number_of_accidents": 1}) == 0


def test_remove_returns_count(store):
    for community in ("a", "b", "c"):
        store.insert(make_record(2024, community))
    store.insert(make_record(2016, "a"))
    assert store.remove(RecordQuery(equals={"year": 2024})) == 3
    assert store.remove() == 1
    assert store.remove() == 0


def test_insert_many_skips_existing_keys(store):
    store.insert(make_record(2016, "aragon", 1, 0.1))
    inserted = store.insert_many([make_record(2016, "aragon", 2, 0.2), make_record(2016, "ceuta")])
    assert inserted == [make_record(2016, "ceuta")]
    assert store.find_one(2016, "aragon")["number_of_accidents"] == 1


def test_concurrent_identical_creates_store_one_record(tmp_path):
    store = ForestFireStore(str(tmp_path / "race.db"))
    results = []

    def create():
        try:
            store.insert(make_record(2024, "madrid"))
            results.append("created")
        except DuplicateKeyError:
            results.append("conflict")

    threads = [threading.Thread(target=create) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    store.close()

    assert results.count("created") == 1
    assert results.count("conflict") == 7


def test_data_survives_reopening(tmp_path):
    path = str(tmp_path / "persist.db")
    store = ForestFireStore(path)
    store.insert(make_record())
    store.close()

    reopened = ForestFireStore(path)
    try:
        assert reopened.find() == [make_record()]
    finally:
        reopened.close()


def test_integers_outside_64_bits_match_nothing(store):
    store.insert(make_record())
    huge = 10 ** 20
    assert not RecordQuery(equals={"year": huge}).is_satisfiable()
    assert store.find(RecordQuery(equals={"number_of_accidents": huge})) == []
    assert store.find_one(huge, "galicia") is None
    assert store.count(RecordQuery(equals={"year": -huge})) == 0
    assert store.remove(RecordQuery(equals={"year": huge})) == 0


def test_year_bounds_outside_64_bits(store):
    store.insert(make_record(2024))
    assert store.find(RecordQuery(year_from=10 ** 20)) == []
    assert store.find(RecordQuery(year_to=-(10 ** 20))) == []
    assert _years(store.find(RecordQuery(year_from=-(10 ** 20), year_to=10 ** 20))) == [2024]
