# calendar_notes/main.py

from calendar_notes import date_math
from calendar_notes.data_manager import NoteDataManager
from calendar_notes.i18n import get_locale
from calendar_notes.settings_manager import SettingsManager
from calendar_notes.view_controller import ViewController


def build_controller(data_manager, settings):
    """由已載入的筆記與設定建立 ViewController，焦點從今天開始。"""
    note_store = data_manager.load_notes()
    return ViewController(settings.view, date_math.today(), get_locale(settings.language), note_store)


def run_app():
    # 資料檔路徑由各個 manager 自行決定 (預設為使用者資料目錄)
    data_manager = NoteDataManager()
    settings_manager = SettingsManager()
    settings = settings_manager.load_settings()
    controller = build_controller(data_manager, settings)

    # GUI 需要顯示環境，延後載入讓核心模組可在無視窗環境中使用
    from calendar_notes.gui import CalendarApp

    app = CalendarApp(controller, data_manager, settings_manager, settings)
    app.mainloop()


if __name__ == "__main__":
    run_app()
