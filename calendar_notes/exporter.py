# calendar_notes/exporter.py

import openpyxl

from calendar_notes.i18n import Locale, format_date

EXPORT_HEADERS = ["Date", "Label", "Text"]


def export_notes_to_excel(store, locale: Locale, filepath):
    """
    將所有非空白筆記依日期匯出為 Excel 檔案 (.xlsx)。
    :param store: NoteStore
    :param locale: 用於產生標題欄位的語言
    :param filepath: 輸出路徑
    :return: 匯出的筆記數量
    """
    notes = sorted((e for e in store.entries() if e.text), key=lambda e: e.date)

    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = locale.window_title
    sheet.append(EXPORT_HEADERS)

    for entry in notes:
        sheet.append([entry.date.to_date(), format_date(entry.date, locale), entry.text])
        sheet.cell(row=sheet.max_row, column=1).number_format = 'yyyy-mm-dd'

    sheet.column_dimensions['A'].width = 12
    sheet.column_dimensions['B'].width = 24
    sheet.column_dimensions['C'].width = 60

    workbook.save(filepath)
    return len(notes)
