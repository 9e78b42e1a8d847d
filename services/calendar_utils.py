# services/calendar_utils.py
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator


def _now() -> datetime:
    """テスト時にモック可能な現在時刻取得"""
    return datetime.now()


def parse_time(time_str: str) -> time:
    """HH:MM形式の文字列をtimeオブジェクトに変換"""
    h, m = map(int, time_str.split(":"))
    return time(h, m)


def to_local(instant: datetime, tz: tzinfo) -> tuple[date, time]:
    """UTC時刻をローカルの(日付, 時刻)に変換する"""
    local = instant.astimezone(tz)
    return local.date(), local.time()


def today() -> date:
    return _now().date()


def yesterday() -> date:
    return today() - timedelta(days=1)


def past_days(start: date, limit: int) -> Iterator[date]:
    """startから1日ずつ遡る日付列（start含む、最大limit日）

    呼び出すたびに先頭からやり直せる。
    """
    for offset in range(max(limit, 0)):
        yield start - timedelta(days=offset)


def monday_of_current_week() -> date:
    """今日を含むISO週の月曜日"""
    year, week, _ = today().isocalendar()
    return date.fromisocalendar(year, week, 1)


def weekdays_of_current_week() -> list[date]:
    """今週の平日（月〜金）"""
    year, week, _ = today().isocalendar()
    return [date.fromisocalendar(year, week, day) for day in range(1, 6)]
