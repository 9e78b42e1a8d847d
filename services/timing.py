# services/timing.py
from dataclasses import dataclass
from datetime import date, time
from typing import Union

from graph.holidays import covers
from graph.state import AttendanceState

NINE_O_CLOCK = time(9, 0)


@dataclass(frozen=True)
class OnTime:
    time_of_day: time


@dataclass(frozen=True)
class Late:
    time_of_day: time


@dataclass(frozen=True)
class Absent:
    pass


@dataclass(frozen=True)
class OnHoliday:
    # 現在の判定ルールでは生成されない
    pass


Timing = Union[OnTime, Late, Absent, OnHoliday]


def classify(
    sheet: AttendanceState,
    user: str,
    day: date,
    cutoff: time = NINE_O_CLOCK,
) -> Timing:
    """指定ユーザー・日付の出勤状況を判定する

    cutoffちょうどは遅刻扱い。休暇状態は参照しない。
    """
    time_of_day = sheet["checkins"].get((user, day))
    if time_of_day is None:
        return Absent()
    if time_of_day < cutoff:
        return OnTime(time_of_day)
    return Late(time_of_day)


def is_on_holiday(sheet: AttendanceState, user: str, day: date) -> bool:
    """指定日がユーザーの休暇期間に含まれるか"""
    return any(covers(holiday, day) for holiday in sheet["holidays"].get(user, []))
