# calendar_notes/i18n.py

from dataclasses import dataclass, replace

from calendar_notes.date_math import MONDAY, iso_week_number, weekday_of


@dataclass(frozen=True)
class Locale:
    """
    單一語言的顯示設定。
    short_days 以星期日開頭；date_format 可使用的欄位：
    {week} 週數前綴、{weekday} 星期縮寫、{day}、{month}、{year}
    """
    name: str
    window_title: str
    menu_today: str
    menu_days: str
    menu_weeks: str
    menu_months: str
    menu_language: str
    menu_file: str
    menu_go_to_date: str
    menu_export: str
    menu_exit: str
    short_days: tuple
    week_prefix: str
    date_format: str


ENGLISH_US = Locale(
    name="English US",
    window_title="Calendar",
    menu_today="Today [F12]",
    menu_days="Days",
    menu_weeks="Weeks",
    menu_months="Months",
    menu_language="Language",
    menu_file="File",
    menu_go_to_date="Go to date...",
    menu_export="Export to Excel...",
    menu_exit="Exit",
    short_days=("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"),
    week_prefix="CW {week}  ",
    date_format="{week}{weekday} {month:02d}/{day:02d}/{year:04d}",
)

ENGLISH_GB = replace(
    ENGLISH_US,
    name="English GB",
    date_format="{week}{weekday} {day:02d}/{month:02d}/{year:04d}",
)

GERMAN = Locale(
    name="Deutsch",
    window_title="Kalender",
    menu_today="Heute [F12]",
    menu_days="Tage",
    menu_weeks="Wochen",
    menu_months="Monate",
    menu_language="Sprache",
    menu_file="Datei",
    menu_go_to_date="Gehe zu Datum...",
    menu_export="Als Excel exportieren...",
    menu_exit="Beenden",
    short_days=("So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"),
    week_prefix="KW {week}  ",
    date_format="{week}{weekday} {day:02d}.{month:02d}.{year:04d}",
)

# 索引值會存入設定檔，只能在尾端新增語言
LANGUAGES = (ENGLISH_US, ENGLISH_GB, GERMAN)
DEFAULT_LANGUAGE = 0


def get_locale(index):
    """依索引取得語言，超出範圍時使用預設語言。"""
    if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(LANGUAGES):
        return LANGUAGES[index]
    return LANGUAGES[DEFAULT_LANGUAGE]


def format_date(key, locale: Locale) -> str:
    """產生日期標題，例如 'CW 1  Mo 01/01/2024' 或 'Di 02.01.2024'。"""
    weekday = weekday_of(key)
    week = ''
    if weekday == MONDAY:
        week = locale.week_prefix.format(week=iso_week_number(key))
    # short_days 從星期日開始，weekday 從星期一開始
    return locale.date_format.format(
        week=week,
        weekday=locale.short_days[(weekday + 1) % 7],
        day=key.day,
        month=key.month,
        year=key.year,
    )
