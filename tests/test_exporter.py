# tests/test_exporter.py

import openpyxl

from calendar_notes.date_math import DateKey
from calendar_notes.exporter import EXPORT_HEADERS, export_notes_to_excel
from calendar_notes.i18n import ENGLISH_US, GERMAN
from calendar_notes.note_manager import NoteStore


def test_export_notes_to_excel(tmp_path):
    store = NoteStore()
    store.set_text(DateKey(2024, 3, 15), "Dentist")
    store.set_text(DateKey(2024, 3, 11), "Standup\nRoom 4")
    store.set_text(DateKey(2024, 3, 12), "")
    filepath = tmp_path / "notes.xlsx"

    count = export_notes_to_excel(store, ENGLISH_US, str(filepath))
    assert count == 2

    sheet = openpyxl.load_workbook(filepath).active
    assert sheet.title == "Calendar"
    rows = list(sheet.iter_rows(values_only=True))
    assert list(rows[0]) == EXPORT_HEADERS
    assert len(rows) == 3
    # 依日期排序
    assert rows[1][0].date().isoformat() == "2024-03-11"
    assert rows[1][1] == "CW 11  Mo 03/11/2024"
    assert rows[1][2] == "Standup\nRoom 4"
    assert rows[2][1] == "Fr 03/15/2024"
    assert rows[2][2] == "Dentist"


def test_export_does_not_modify_store(tmp_path):
    store = NoteStore()
    store.set_text(DateKey(2024, 5, 1), "b")
    store.set_text(DateKey(2024, 4, 1), "")
    before = store.entries()
    export_notes_to_excel(store, ENGLISH_US, str(tmp_path / "out.xlsx"))
    assert store.entries() == before


def test_export_empty_store_writes_header_only(tmp_path):
    filepath = tmp_path / "empty.xlsx"
    assert export_notes_to_excel(NoteStore(), GERMAN, str(filepath)) == 0

    sheet = openpyxl.load_workbook(filepath).active
    assert sheet.title == "Kalender"
    assert list(sheet.iter_rows(values_only=True)) == [tuple(EXPORT_HEADERS)]
