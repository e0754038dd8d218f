# calendar_notes/data_manager.py

import os

from calendar_notes.note_manager import NoteStore
from calendar_notes import utils

# 筆記檔名，放在使用者資料目錄中
NOTES_FILE_NAME = 'calendar'


class NoteDataManager:
    def __init__(self, data_file=None):
        self.data_file = data_file if data_file else os.path.join(utils.default_data_dir(), NOTES_FILE_NAME)

    def _load_raw_notes(self):
        """從檔案讀取原始位元組，檔案不存在時回傳 None。"""
        if not os.path.exists(self.data_file):
            return None
        try:
            with open(self.data_file, 'rb') as f:
                return f.read()
        except OSError as e:
            print(f"Error loading notes from {self.data_file}: {e}")
            return None

    def load_notes(self):
        """載入筆記。檔案不存在或損壞時回傳空的 NoteStore。"""
        raw = self._load_raw_notes()
        if raw is None:
            return NoteStore()
        return NoteStore.from_bytes(raw)

    def save_notes(self, store: NoteStore):
        """
        整理後將筆記寫入檔案。
        寫入失敗時 OSError 會直接拋出，內容無法編碼時拋出 ValueError，
        兩種情況原本的檔案都不會被修改，由呼叫端決定如何提示使用者。
        """
        store.compact()
        # 先完成序列化，失敗時不會動到現有檔案
        data = store.to_bytes()
        utils.atomic_write_bytes(self.data_file, data)
        return True
