# calendar_notes/settings_manager.py

import json
import os
from dataclasses import dataclass

from calendar_notes import utils
from calendar_notes.date_math import DAY_VIEW, VIEW_COUNT
from calendar_notes.i18n import DEFAULT_LANGUAGE, LANGUAGES

SETTINGS_FILE_NAME = 'calendar.set'


@dataclass
class AppSettings:
    maximized: bool = False
    view: int = DAY_VIEW
    language: int = DEFAULT_LANGUAGE
    # 上次視窗所在螢幕工作區的左上角
    monitor_x: int = 0
    monitor_y: int = 0

    def to_record(self):
        return {
            'Maximized': self.maximized,
            'View': self.view,
            'Language': self.language,
            'MonitorX': self.monitor_x,
            'MonitorY': self.monitor_y,
        }


def _int_field(raw, name, default):
    value = raw.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


class SettingsManager:
    def __init__(self, settings_file=None):
        self.settings_file = settings_file if settings_file else os.path.join(utils.default_data_dir(), SETTINGS_FILE_NAME)

    def _load_raw_settings(self):
        """從檔案載入原始 JSON 數據。"""
        if not os.path.exists(self.settings_file):
            return {}
        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError:
            print(f"Warning: Could not decode JSON from {self.settings_file}. Using default settings.")
            return {}
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error loading settings from {self.settings_file}: {e}")
            return {}

    def load_settings(self):
        """載入設定，超出範圍的值會被修正而不是拒絕。"""
        raw = self._load_raw_settings()
        if not isinstance(raw, dict):
            raw = {}

        settings = AppSettings()
        maximized = raw.get('Maximized', False)
        settings.maximized = maximized if isinstance(maximized, bool) else False
        settings.monitor_x = _int_field(raw, 'MonitorX', 0)
        settings.monitor_y = _int_field(raw, 'MonitorY', 0)

        view = _int_field(raw, 'View', DAY_VIEW)
        if view < 0:
            view = DAY_VIEW
        settings.view = view % VIEW_COUNT

        language = _int_field(raw, 'Language', DEFAULT_LANGUAGE)
        if not 0 <= language < len(LANGUAGES):
            language = DEFAULT_LANGUAGE
        settings.language = language
        return settings

    def save_settings(self, settings: AppSettings):
        """將設定寫入檔案，OSError 由呼叫端處理。"""
        data = json.dumps(settings.to_record(), indent=4, ensure_ascii=False).encode('utf-8')
        utils.atomic_write_bytes(self.settings_file, data)
        return True
