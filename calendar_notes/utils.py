# calendar_notes/utils.py

import os
import tempfile

APP_DIR_NAME = '.calendar_notes'


def default_data_dir():
    """資料目錄：Windows 使用 %APPDATA%，其他平台使用 ~/.calendar_notes"""
    appdata = os.environ.get('APPDATA')
    if appdata:
        return appdata
    return os.path.join(os.path.expanduser('~'), APP_DIR_NAME)


def from_editor_lines(text):
    """將編輯器的換行 (\\r\\n 或 \\r) 統一成 \\n"""
    return text.replace('\r\n', '\n').replace('\r', '\n')



def atomic_write_bytes(path, data):
    """
    先寫到同目錄的暫存檔，再以 os.replace 取代目標檔案。
    寫入失敗時原本的檔案保持不變，OSError 交給呼叫端處理。
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=directory, prefix='.' + os.path.basename(path) + '.', suffix='.tmp')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
