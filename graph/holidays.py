# graph/holidays.py
from dataclasses import dataclass
from datetime import date
from typing import Union


@dataclass(frozen=True)
class CompletedHoliday:
    """終了済みの休暇期間（両端を含む）"""
    start: date
    end: date


@dataclass(frozen=True)
class OngoingHoliday:
    """終了日未定の休暇期間"""
    start: date


Holiday = Union[CompletedHoliday, OngoingHoliday]


def start_holiday(start: date, holidays: list[Holiday]) -> list[Holiday]:
    """休暇を開始する（先頭が進行中なら何もしない）

    スタックは新しい順。進行中の休暇は先頭に最大1つだけ存在する。
    """
    if holidays and isinstance(holidays[0], OngoingHoliday):
        return holidays
    return [OngoingHoliday(start)] + holidays


def end_holiday(end: date, holidays: list[Holiday]) -> list[Holiday]:
    """進行中の休暇をendで閉じる（進行中でなければ何もしない）"""
    if holidays and isinstance(holidays[0], OngoingHoliday):
        return [CompletedHoliday(holidays[0].start, end)] + holidays[1:]
    return holidays


def covers(holiday: Holiday, day: date) -> bool:
    if isinstance(holiday, OngoingHoliday):
        return holiday.start <= day
    return holiday.start <= day <= holiday.end
