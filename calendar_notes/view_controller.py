# calendar_notes/view_controller.py

from collections import namedtuple

from calendar_notes import date_math
from calendar_notes.date_math import (
    BACKWARD,
    FORWARD,
    MONTH_VIEW,
    VIEW_COUNT,
    DateKey,
    add_days,
    page_anchor,
    page_size,
    step_unit,
)
from calendar_notes.i18n import Locale, format_date
from calendar_notes.note_manager import NoteStore

# 頁面中的一格，交由 GUI 顯示
PageCell = namedtuple('PageCell', ['date', 'label', 'text', 'is_today'])


class ViewController:
    """
    管理檢視模式 (日/週/月) 與焦點日期，並計算目前頁面上的日期。
    不直接操作任何 GUI 元件，只回傳資料。
    """

    def __init__(self, granularity: int, focus_date: DateKey, locale: Locale, note_store: NoteStore):
        self.granularity = granularity % VIEW_COUNT
        self.focus_date = focus_date
        self.locale = locale
        self.note_store = note_store
        self._page = self._compute_page()

    def _compute_page(self):
        first = page_anchor(self.granularity, self.focus_date)
        return [add_days(first, i) for i in range(page_size(self.granularity))]

    def _refresh(self):
        self._page = self._compute_page()
        return self.current_page()

    def current_page(self):
        """目前頁面上依序排列的日期。"""
        return list(self._page)

    def page_cells(self):
        today = date_math.today()
        return [
            PageCell(
                date=key,
                label=format_date(key, self.locale),
                text=self.note_store.get_text(key),
                is_today=key == today,
            )
            for key in self._page
        ]

    def switch_to(self, granularity):
        """切換檢視模式，焦點日期不變。"""
        self.granularity = granularity % VIEW_COUNT
        return self._refresh()

    def next_view(self):
        return self.switch_to(self.granularity + 1)

    def previous_view(self):
        return self.switch_to(self.granularity + VIEW_COUNT - 1)

    def step(self, direction):
        """
        前進 (FORWARD) 或後退 (BACKWARD) 一頁。
        月檢視的跨度取決於離開的月份，因此先前進再後退不一定回到原日期。
        """
        if direction not in (FORWARD, BACKWARD):
            raise ValueError(f"Invalid direction: {direction}. Must be FORWARD or BACKWARD.")
        days = step_unit(self.granularity, self.focus_date, direction)
        self.focus_date = add_days(self.focus_date, direction * days)
        return self._refresh()

    def nudge(self, days):
        """將焦點移動固定天數，與檢視模式無關。"""
        self.focus_date = add_days(self.focus_date, days)
        return self._refresh()

    def jump_to_today(self):
        self.focus_date = date_math.today()
        return self._refresh()

    def jump_to(self, key: DateKey):
        self.focus_date = key
        return self._refresh()

    def focus_changed_externally(self, key: DateKey):
        """使用者在目前頁面中移動了游標，只更新焦點，不重新計算頁面。"""
        self.focus_date = key

    def set_locale(self, locale: Locale):
        self.locale = locale

    def commit(self, key: DateKey, text: str):
        """儲存編輯中的格子內容。"""
        self.note_store.set_text(key, text)

    def is_month_view(self):
        return self.granularity == MONTH_VIEW
