# calendar_notes/gui.py

import tkinter as tk
import tkinter.font as tkfont
from tkinter import messagebox, filedialog
import customtkinter
from tkcalendar import Calendar
from datetime import datetime

from calendar_notes import utils
from calendar_notes.data_manager import NoteDataManager
from calendar_notes.date_math import (
    BACKWARD,
    DAY_VIEW,
    DAYS_PER_WEEK,
    FORWARD,
    MONTH_ROWS,
    MONTH_VIEW,
    WEEK_VIEW,
    DateKey,
    page_size,
)
from calendar_notes.exporter import export_notes_to_excel
from calendar_notes.i18n import LANGUAGES, get_locale
from calendar_notes.settings_manager import AppSettings, SettingsManager
from calendar_notes.view_controller import ViewController

CELL_COUNT = DAYS_PER_WEEK * MONTH_ROWS

# 設定 customtkinter 的外觀模式和顏色主題
customtkinter.set_appearance_mode("System")
customtkinter.set_default_color_theme("blue")


class CellEditor:
    """一個日期格：上方標題，下方可編輯的文字框。"""

    def __init__(self, parent, font, bold_font):
        self.frame = customtkinter.CTkFrame(parent, corner_radius=0, border_width=1)
        self.caption = customtkinter.CTkLabel(self.frame, text="", height=20, font=font)
        self.textbox = customtkinter.CTkTextbox(self.frame, wrap="word", corner_radius=0)
        self.caption.pack(side=tk.TOP, fill="x")
        self.textbox.pack(side=tk.TOP, fill="both", expand=True)
        self.font = font
        self.bold_font = bold_font
        self.date = None
        self.visible = False

    def show_cell(self, cell):
        self.date = cell.date
        self.caption.configure(text=cell.label, font=self.bold_font if cell.is_today else self.font)
        self.textbox.delete("1.0", tk.END)
        self.textbox.insert("1.0", cell.text)

    def text(self):
        return utils.from_editor_lines(self.textbox.get("1.0", "end-1c"))

    def has_focus(self, focused_widget):
        if focused_widget is None:
            return False
        # CTkTextbox 內部包了一個 tk.Text，取得焦點的是子元件
        path = str(focused_widget)
        return path == str(self.textbox) or path.startswith(str(self.textbox) + ".")

    def focus(self):
        self.textbox.focus_set()


class CalendarApp(customtkinter.CTk):
    def __init__(self, controller: ViewController, data_manager: NoteDataManager,
                 settings_manager: SettingsManager, settings: AppSettings):
        super().__init__()

        self.controller = controller
        self.data_manager = data_manager
        self.settings_manager = settings_manager
        self.settings = settings
        self.log_entries = []

        self.title(self.controller.locale.window_title)
        self.geometry("1000x650")
        self.restore_window_position()

        self.create_widgets()
        self.create_menu()
        self.bind_shortcuts(self)
        for editor in self.editors:
            self.bind_shortcuts(editor.textbox)

        self.protocol("WM_DELETE_WINDOW", self.on_close)

        self.log_operation("應用程式啟動")
        self.show_view()

    def restore_window_position(self):
        """上次的螢幕位置仍在畫面範圍內時才移動視窗，避免視窗跑到不存在的螢幕上。"""
        x, y = self.settings.monitor_x, self.settings.monitor_y
        if 0 <= x < self.winfo_screenwidth() and 0 <= y < self.winfo_screenheight():
            self.geometry(f"+{x}+{y}")
        if self.settings.maximized:
            self.set_maximized()

    def set_maximized(self):
        try:
            self.state("zoomed")
        except tk.TclError:
            # X11 沒有 zoomed 狀態
            self.attributes("-zoomed", True)

    def is_maximized(self):
        try:
            if self.state() == "zoomed":
                return True
            return bool(int(self.attributes("-zoomed")))
        except (tk.TclError, ValueError):
            return False

    def log_operation(self, message):
        """記錄操作到日誌列表"""
        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        log_entry = f"{timestamp} - {message}"
        self.log_entries.append(log_entry)
        print(log_entry)

    def create_widgets(self):
        font = customtkinter.CTkFont(family="Tahoma", size=13)
        bold_font = customtkinter.CTkFont(family="Tahoma", size=13, weight="bold")

        self.grid_frame = customtkinter.CTkFrame(self, corner_radius=0, fg_color="transparent")
        self.grid_frame.pack(fill="both", expand=True)
        self.editors = [CellEditor(self.grid_frame, font, bold_font) for _ in range(CELL_COUNT)]

    def create_menu(self):
        """創建應用程式頂部選單 (切換語言時重新建立)"""
        if hasattr(self, 'menubar') and self.menubar:
            self.menubar.destroy()

        locale = self.controller.locale
        self.menubar = tk.Menu(self)
        self.config(menu=self.menubar)

        filemenu = tk.Menu(self.menubar, tearoff=0)
        self.menubar.add_cascade(label=locale.menu_file, menu=filemenu)
        filemenu.add_command(label=locale.menu_go_to_date, command=self.open_calendar_dialog)
        filemenu.add_command(label=locale.menu_export, command=self.export_to_excel)
        filemenu.add_separator()
        filemenu.add_command(label=locale.menu_exit, command=self.on_close)

        self.menubar.add_command(label=locale.menu_today, command=self.show_today)
        self.menubar.add_command(label=locale.menu_days, command=lambda: self.show_view(self.controller.switch_to, DAY_VIEW))
        self.menubar.add_command(label=locale.menu_weeks, command=lambda: self.show_view(self.controller.switch_to, WEEK_VIEW))
        self.menubar.add_command(label=locale.menu_months, command=lambda: self.show_view(self.controller.switch_to, MONTH_VIEW))
        self.menubar.add_command(label="[F1] <", command=self.move_backward)
        self.menubar.add_command(label="> [F2]", command=self.move_forward)

        langmenu = tk.Menu(self.menubar, tearoff=0)
        self.menubar.add_cascade(label=locale.menu_language, menu=langmenu)
        self.language_var = tk.IntVar(value=self.settings.language)
        for index, language in enumerate(LANGUAGES):
            langmenu.add_radiobutton(label=language.name, variable=self.language_var, value=index,
                                     command=lambda i=index: self.set_language(i))

    def bind_shortcuts(self, widget):
        """綁定快捷鍵。文字框需要個別綁定，才能蓋過 Tab 的預設行為。"""
        widget.bind("<Escape>", lambda e: self.on_close() or "break")
        widget.bind("<Tab>", lambda e: self._shortcut(self.controller.next_view))
        widget.bind("<Shift-Tab>", lambda e: self._shortcut(self.controller.previous_view))
        widget.bind("<ISO_Left_Tab>", lambda e: self._shortcut(self.controller.previous_view))
        widget.bind("<F1>", lambda e: self._shortcut(self.controller.step, BACKWARD))
        widget.bind("<F2>", lambda e: self._shortcut(self.controller.step, FORWARD))
        widget.bind("<F12>", lambda e: self.show_today() or "break")
        widget.bind("<Alt-Left>", lambda e: self._shortcut(self.controller.nudge, -1))
        widget.bind("<Alt-Right>", lambda e: self._shortcut(self.controller.nudge, 1))
        widget.bind("<Alt-Up>", lambda e: self._month_shortcut(-DAYS_PER_WEEK))
        widget.bind("<Alt-Down>", lambda e: self._month_shortcut(DAYS_PER_WEEK))

    def _shortcut(self, action, *args):
        self.show_view(action, *args)
        return "break"

    def _month_shortcut(self, days):
        if self.controller.is_month_view():
            self.show_view(self.controller.nudge, days)
        return "break"

    def move_forward(self):
        self.show_view(self.controller.step, FORWARD)

    def move_backward(self):
        self.show_view(self.controller.step, BACKWARD)

    def show_today(self):
        self.show_view(self.controller.jump_to_today)
        self.log_operation(f"跳到今天: {self.controller.focus_date}")

    def set_language(self, index):
        self.settings.language = index
        locale = get_locale(index)
        self.controller.set_locale(locale)
        self.title(locale.window_title)
        self.create_menu()
        self.show_view()
        self.log_operation(f"切換語言為: {locale.name}")

    def focused_editor(self):
        try:
            focused_widget = self.focus_get()
        except (KeyError, tk.TclError):
            # 焦點在對話框等其他視窗時可能取不到
            return None
        return next((e for e in self.editors if e.visible and e.has_focus(focused_widget)), None)

    def save_view(self):
        """將所有顯示中的文字框內容寫回筆記"""
        for editor in self.editors:
            if editor.visible and editor.date is not None:
                self.controller.commit(editor.date, editor.text())

    def show_view(self, action=None, *args):
        """
        先同步焦點與儲存目前頁面，再執行導覽動作並重新顯示頁面。
        :param action: ViewController 的導覽方法，None 表示只重新顯示
        """
        editor = self.focused_editor()
        if editor is not None:
            self.controller.focus_changed_externally(editor.date)
        self.save_view()
        if action is not None:
            action(*args)
        self.settings.view = self.controller.granularity
        self.layout_editors()
        for editor in self.editors:
            if editor.visible and editor.date == self.controller.focus_date:
                editor.focus()
                break

    def layout_editors(self):
        cells = self.controller.page_cells()
        count = page_size(self.controller.granularity)
        columns = 1 if count == 1 else DAYS_PER_WEEK
        rows = count // columns

        for editor in self.editors:
            editor.frame.grid_forget()
            editor.visible = False

        for i in range(DAYS_PER_WEEK):
            self.grid_frame.grid_columnconfigure(i, weight=1 if i < columns else 0, uniform="col" if i < columns else "")
        for i in range(MONTH_ROWS):
            self.grid_frame.grid_rowconfigure(i, weight=1 if i < rows else 0, uniform="row" if i < rows else "")

        for i, cell in enumerate(cells):
            editor = self.editors[i]
            editor.show_cell(cell)
            editor.frame.grid(row=i // columns, column=i % columns, sticky="nsew")
            editor.visible = True

    def open_calendar_dialog(self):
        """打開日曆選擇對話框，跳到選取的日期。有筆記的日期會被標示。"""
        def grab_date():
            try:
                # date_pattern 為 yyyy-mm-dd
                selected_date = cal.get_date()
                if selected_date:
                    self.show_view(self.controller.jump_to, DateKey.parse(selected_date))
                    self.log_operation(f"跳到日期: {self.controller.focus_date}")
            except Exception as e:
                messagebox.showerror("Date error", f"Could not read the selected date: {e}")
                self.log_operation(f"選取日期失敗: {e}")
            finally:
                top.destroy()

        self.save_view()
        focus = self.controller.focus_date

        top = customtkinter.CTkToplevel(self)
        top.title(self.controller.locale.menu_go_to_date.rstrip('.'))
        top.transient(self)
        top.grab_set()

        calendar_font = tkfont.Font(family="Arial", size=12)
        cal = Calendar(top, selectmode='day', date_pattern='yyyy-mm-dd', firstweekday='monday',
                       showweeknumbers=True, year=focus.year, month=focus.month, day=focus.day,
                       font=calendar_font)
        for key in self.controller.note_store.dates_with_notes():
            cal.calevent_create(key.to_date(), self.controller.note_store.get_text(key), tags="note")
        cal.tag_config("note", background="lightblue", foreground="black")
        cal.pack(padx=10, pady=10)

        ok_button = customtkinter.CTkButton(top, text="OK", command=grab_date)
        ok_button.pack(pady=10)
        top.after(10, top.lift)

    def export_to_excel(self):
        """將筆記匯出為 Excel 檔案 (.xlsx)"""
        self.save_view()
        filepath = filedialog.asksaveasfilename(
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx"), ("All files", "*.*")],
            title=self.controller.locale.menu_export.rstrip('.'),
        )
        if not filepath:
            self.log_operation("匯出到 Excel 操作已取消。")
            return

        self.log_operation(f"開始匯出到 Excel 檔案：{filepath}")
        try:
            count = export_notes_to_excel(self.controller.note_store, self.controller.locale, filepath)
        except Exception as e:
            messagebox.showerror("Export error", f"Could not export notes:\n{e}")
            self.log_operation(f"匯出到 Excel 失敗：{e}")
            return
        self.log_operation(f"成功匯出 {count} 筆筆記到 Excel 檔案：{filepath}")

    def on_close(self):
        """關閉前儲存筆記與設定。儲存失敗時提示使用者，不直接關閉以免遺失資料。"""
        self.save_view()
        self.settings.view = self.controller.granularity
        self.settings.maximized = self.is_maximized()
        if not self.settings.maximized:
            self.settings.monitor_x = self.winfo_x()
            self.settings.monitor_y = self.winfo_y()

        try:
            self.data_manager.save_notes(self.controller.note_store)
            self.settings_manager.save_settings(self.settings)
        except (OSError, ValueError) as e:
            # 原本的檔案不會被修改，讓使用者選擇留下來修正或直接關閉
            self.log_operation(f"儲存失敗：{e}")
            if not messagebox.askyesno("Save error", f"Could not save the calendar:\n{e}\n\nClose anyway?"):
                return
        else:
            self.log_operation("筆記與設定已儲存。")
        self.destroy()
