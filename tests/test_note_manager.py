# tests/test_note_manager.py

import json
import pytest

from calendar_notes.date_math import DateKey
from calendar_notes.note_manager import NoteEntry, NoteStore


@pytest.fixture
def store():
    """提供一個含有三筆筆記 (其中一筆為空白) 的 NoteStore"""
    s = NoteStore()
    s.set_text(DateKey(2024, 3, 15), "Dentist")
    s.set_text(DateKey(2023, 12, 24), "Christmas Eve")
    s.set_text(DateKey(2024, 1, 1), "")
    return s


def test_get_text_missing_date_returns_empty_string():
    assert NoteStore().get_text(DateKey(2024, 3, 15)) == ""


def test_set_and_get_text():
    s = NoteStore()
    key = DateKey(2024, 3, 15)
    s.set_text(key, "x")
    assert s.get_text(key) == "x"


def test_set_text_replaces_existing_entry(store):
    key = DateKey(2024, 3, 15)
    store.set_text(key, "Dentist 10:00\nBring card")
    assert store.get_text(key) == "Dentist 10:00\nBring card"
    assert len(store) == 3


def test_set_text_caches_weekday():
    s = NoteStore()
    s.set_text(DateKey(2024, 3, 17), "Sunday")
    assert s.entries()[0].weekday == 6


def test_set_text_appends_new_entries_in_order():
    s = NoteStore()
    s.set_text(DateKey(2024, 5, 1), "b")
    s.set_text(DateKey(2024, 4, 1), "a")
    assert [e.date for e in s.entries()] == [DateKey(2024, 5, 1), DateKey(2024, 4, 1)]


def test_set_text_rejects_non_string_without_side_effects(store):
    before = store.entries()
    with pytest.raises(TypeError):
        store.set_text(DateKey(2024, 6, 1), None)
    assert store.entries() == before


def test_setting_empty_then_compact_removes_one_entry(store):
    store.compact()
    count = len(store)
    store.set_text(DateKey(2024, 3, 15), "")
    assert len(store) == count  # 空白筆記在整理前仍然存在
    store.compact()
    assert len(store) == count - 1
    assert store.get_text(DateKey(2024, 3, 15)) == ""


def test_compact_drops_empty_and_sorts(store):
    store.compact()
    entries = store.entries()
    assert [e.date for e in entries] == [DateKey(2023, 12, 24), DateKey(2024, 3, 15)]
    assert all(e.text for e in entries)


def test_compact_is_idempotent(store):
    once = store.compact().entries()
    twice = store.compact().entries()
    assert once == twice


def test_dates_with_notes(store):
    assert store.dates_with_notes() == [DateKey(2023, 12, 24), DateKey(2024, 3, 15)]


def test_to_bytes_format(store):
    store.compact()
    data = json.loads(store.to_bytes().decode('utf-8'))
    assert data == {
        "Dates": [
            {"Day": 24, "Month": 12, "Year": 2023, "Weekday": 6, "Text": "Christmas Eve"},
            {"Day": 15, "Month": 3, "Year": 2024, "Weekday": 4, "Text": "Dentist"},
        ]
    }


def test_from_bytes_restores_entries(store):
    store.compact()
    restored = NoteStore.from_bytes(store.to_bytes())
    assert restored == store
    assert restored.get_text(DateKey(2024, 3, 15)) == "Dentist"


def test_from_bytes_keeps_multiline_and_unicode_text():
    raw = '{"Dates": [{"Day": 1, "Month": 2, "Year": 2024, "Weekday": 3, "Text": "早餐\\nKaffee"}]}'
    restored = NoteStore.from_bytes(raw.encode('utf-8'))
    assert restored.get_text(DateKey(2024, 2, 1)) == "早餐\nKaffee"


def test_from_bytes_recomputes_weekday():
    raw = b'{"Dates": [{"Day": 15, "Month": 3, "Year": 2024, "Weekday": 0, "Text": "x"}]}'
    assert NoteStore.from_bytes(raw).entries()[0].weekday == 4


@pytest.mark.parametrize("raw", [
    b"this is not json {",
    b"[]",
    b'{"Dates": 5}',
    b'{"Other": []}',
    b"\xff\xfe\x00",
])
def test_from_bytes_malformed_input_gives_empty_store(raw, capsys):
    restored = NoteStore.from_bytes(raw)
    assert len(restored) == 0
    assert "Warning" in capsys.readouterr().out


def test_from_bytes_skips_malformed_records(capsys):
    raw = json.dumps({"Dates": [
        {"Day": 15, "Month": 3, "Year": 2024, "Weekday": 4, "Text": "ok"},
        {"Day": 0, "Month": 13, "Year": 2024, "Weekday": 4, "Text": "bad date"},
        {"Day": 16, "Month": 3, "Year": 2024, "Text": 42},
        "not a record",
    ]}).encode('utf-8')
    restored = NoteStore.from_bytes(raw)
    assert len(restored) == 1
    assert restored.get_text(DateKey(2024, 3, 15)) == "ok"
    assert "Skipped 3" in capsys.readouterr().out


def test_from_bytes_duplicate_dates_keep_last_record():
    raw = json.dumps({"Dates": [
        {"Day": 15, "Month": 3, "Year": 2024, "Weekday": 4, "Text": "first"},
        {"Day": 15, "Month": 3, "Year": 2024, "Weekday": 4, "Text": "second"},
    ]}).encode('utf-8')
    restored = NoteStore.from_bytes(raw)
    assert len(restored) == 1
    assert restored.get_text(DateKey(2024, 3, 15)) == "second"


def test_note_entry_to_record():
    entry = NoteEntry(date=DateKey(2024, 1, 1), weekday=0, text="New year")
    assert entry.to_record() == {"Day": 1, "Month": 1, "Year": 2024, "Weekday": 0, "Text": "New year"}


def test_to_bytes_rejects_unencodable_text():
    s = NoteStore()
    s.set_text(DateKey(2024, 3, 16), "emoji \ud83d")
    with pytest.raises(ValueError, match="2024-03-16"):
        s.to_bytes()
