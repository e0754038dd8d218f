# calendar_notes/note_manager.py

import json
from dataclasses import dataclass

from calendar_notes.date_math import DateKey, InvalidDateError, weekday_of


@dataclass
class NoteEntry:
    date: DateKey
    weekday: int  # 0 = 星期一，寫入時快取，僅供儲存格式使用
    text: str

    def to_record(self):
        return {
            'Day': self.date.day,
            'Month': self.date.month,
            'Year': self.date.year,
            'Weekday': self.weekday,
            'Text': self.text,
        }


class NoteStore:
    """以日期為鍵的筆記集合，每個日期最多一筆。"""

    def __init__(self):
        self._entries = {}

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, NoteStore):
            return NotImplemented
        return self.entries() == other.entries()

    def entries(self):
        """獲取所有筆記的副本 (依插入或整理後的順序)。"""
        return list(self._entries.values())

    def get_text(self, key: DateKey) -> str:
        """取得某日的筆記，沒有則回傳空字串。"""
        entry = self._entries.get(key)
        return entry.text if entry else ''

    def set_text(self, key: DateKey, text: str):
        """
        新增或取代某日的筆記。
        空字串也會寫入，等到 compact() 時才移除。
        """
        if not isinstance(text, str):
            raise TypeError(f"Note text must be a string, not {type(text).__name__}.")
        entry = self._entries.get(key)
        if entry:
            entry.text = text
        else:
            self._entries[key] = NoteEntry(date=key, weekday=weekday_of(key), text=text)

    def dates_with_notes(self):
        return sorted(key for key, entry in self._entries.items() if entry.text)

    def compact(self):
        """移除空白筆記並依日期遞增排序。重複呼叫結果相同。"""
        kept = sorted((e for e in self._entries.values() if e.text), key=lambda e: e.date)
        self._entries = {entry.date: entry for entry in kept}
        return self

    def to_bytes(self):
        """序列化為 UTF-8 JSON。筆記含有無法編碼的字元 (例如單獨的 surrogate) 時拋出 ValueError。"""
        for entry in self._entries.values():
            try:
                entry.text.encode('utf-8')
            except UnicodeEncodeError:
                raise ValueError(f"Note for {entry.date} contains characters that cannot be saved as UTF-8.")
        data = {'Dates': [entry.to_record() for entry in self._entries.values()]}
        return json.dumps(data, indent=4, ensure_ascii=False).encode('utf-8')

    @classmethod
    def from_bytes(cls, data):
        """
        從儲存格式還原。任何格式錯誤都回傳空的 NoteStore，不中斷程式。
        :param data: JSON 位元組 ({"Dates": [...]})
        """
        try:
            raw = json.loads(data.decode('utf-8') if isinstance(data, (bytes, bytearray)) else data)
        except (UnicodeDecodeError, json.JSONDecodeError, TypeError) as e:
            print(f"Warning: Could not decode notes ({e}). Starting with empty notes.")
            return cls()

        if not isinstance(raw, dict) or not isinstance(raw.get('Dates'), list):
            print("Warning: Notes data has no 'Dates' list. Starting with empty notes.")
            return cls()

        store = cls()
        skipped = 0
        for record in raw['Dates']:
            entry = _entry_from_record(record)
            if entry is None:
                skipped += 1
                continue
            # 同一日期出現兩次時以後者為準
            store._entries[entry.date] = entry

        if skipped:
            print(f"Warning: Skipped {skipped} malformed note record(s).")
        return store


def _entry_from_record(record):
    if not isinstance(record, dict):
        return None
    text = record.get('Text', '')
    if not isinstance(text, str):
        return None
    try:
        key = DateKey(record.get('Year'), record.get('Month'), record.get('Day'))
    except InvalidDateError:
        return None
    # Weekday 只是快取值，以實際日期重新計算
    return NoteEntry(date=key, weekday=weekday_of(key), text=text)
