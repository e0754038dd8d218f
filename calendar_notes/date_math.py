# calendar_notes/date_math.py

from dataclasses import dataclass
from datetime import date, datetime, timedelta

# 檢視模式，與設定檔中儲存的整數一致
DAY_VIEW = 0
WEEK_VIEW = 1
MONTH_VIEW = 2
VIEW_COUNT = 3

FORWARD = 1
BACKWARD = -1

MONDAY = 0

# 月檢視固定為 5 列 x 7 欄
MONTH_ROWS = 5
DAYS_PER_WEEK = 7

_MONTH_LENGTHS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


class InvalidDateError(ValueError):
    """由外部輸入建立了不存在的日期 (例如 day 0 或 month 13)。"""


def is_leap_year(year):
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(year, month):
    """回傳指定月份的天數 (28/29/30/31)，會考慮閏年。"""
    if not isinstance(month, int) or not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month: {month!r}. Must be between 1 and 12.")
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_LENGTHS[month - 1]


@dataclass(frozen=True, order=True)
class DateKey:
    """以 (year, month, day) 表示的日曆日期，排序即為時間順序。"""
    year: int
    month: int
    day: int

    def __post_init__(self):
        for name in ("year", "month", "day"):
            value = getattr(self, name)
            # bool 是 int 的子類別，不接受
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidDateError(f"Invalid {name}: {value!r}. Must be an integer.")
        if not 1 <= self.year <= 9999:
            raise InvalidDateError(f"Invalid year: {self.year}. Must be between 1 and 9999.")
        max_day = days_in_month(self.year, self.month)
        if not 1 <= self.day <= max_day:
            raise InvalidDateError(
                f"Invalid day: {self.day} for {self.year:04d}-{self.month:02d}. Must be between 1 and {max_day}."
            )

    @classmethod
    def from_date(cls, value):
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text):
        """解析 YYYY-MM-DD 字串。"""
        try:
            parsed = datetime.strptime(text, '%Y-%m-%d').date()
        except (TypeError, ValueError):
            raise InvalidDateError(f"Invalid date format: {text!r}. Please use YYYY-MM-DD.")
        return cls.from_date(parsed)

    def to_date(self):
        return date(self.year, self.month, self.day)

    @property
    def weekday(self):
        return self.to_date().weekday()

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def today():
    """今天的本地日期。核心中唯一讀取時鐘的地方。"""
    return DateKey.from_date(date.today())


def add_days(key: DateKey, n: int) -> DateKey:
    """日期加減天數，跨月、跨年與閏日都由 datetime 處理。"""
    try:
        return DateKey.from_date(key.to_date() + timedelta(days=n))
    except OverflowError:
        raise InvalidDateError(f"{key} + {n} days is outside the supported calendar range.")


def weekday_of(key: DateKey) -> int:
    """0 = 星期一 ... 6 = 星期日"""
    return key.to_date().weekday()


def iso_week_number(key: DateKey) -> int:
    """ISO-8601 週數。格式化時只對星期一使用。"""
    return key.to_date().isocalendar()[1]


def page_anchor(granularity, key):
    """
    回傳目前頁面的第一天。
    :param granularity: DAY_VIEW / WEEK_VIEW / MONTH_VIEW
    :param key: 焦點日期
    :return: 日檢視為日期本身；週檢視為該週星期一；月檢視為該月 1 日所在週的星期一
    """
    if granularity == DAY_VIEW:
        return key
    if granularity == MONTH_VIEW:
        key = DateKey(key.year, key.month, 1)
    while weekday_of(key) != MONDAY:
        key = add_days(key, -1)
    return key


def step_unit(granularity, key, direction):
    """
    前進或後退一頁所需的天數。
    月檢視時向前用目前月份的天數，向後用上個月的天數。
    """
    if granularity == DAY_VIEW:
        return 1
    if granularity == WEEK_VIEW:
        return DAYS_PER_WEEK
    month = key.month
    if direction < 0:
        # 一月的上個月視為同年十二月，天數固定 31
        month = (month + 10) % 12 + 1
    return days_in_month(key.year, month)


def page_size(granularity):
    if granularity == DAY_VIEW:
        return 1
    if granularity == WEEK_VIEW:
        return DAYS_PER_WEEK
    return DAYS_PER_WEEK * MONTH_ROWS
