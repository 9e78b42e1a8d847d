# services/queries.py
from datetime import date, time

from graph.state import AttendanceState
from services.calendar_utils import past_days
from services.timing import NINE_O_CLOCK, Late, OnTime, classify, is_on_holiday

DEFAULT_MAX_LOOKBACK_DAYS = 365
DEFAULT_CHART_WINDOW_DAYS = 20


def known_users(sheet: AttendanceState) -> set[str]:
    """一度でもチェックインしたユーザー"""
    return {user for user, _ in sheet["checkins"]}


def summary_of_day(
    sheet: AttendanceState,
    day: date,
    cutoff: time = NINE_O_CLOCK,
) -> tuple[int, list[int]]:
    """(日付インデックス, [定時人数, 遅刻人数]) を返す。欠勤はどちらにも数えない"""
    timings = [classify(sheet, user, day, cutoff) for user in known_users(sheet)]
    on_time = sum(1 for t in timings if isinstance(t, OnTime))
    late = sum(1 for t in timings if isinstance(t, Late))
    return day.toordinal(), [on_time, late]


def late_comers(
    sheet: AttendanceState,
    day: date,
    cutoff: time = NINE_O_CLOCK,
) -> set[str]:
    """定時にチェックインしなかったユーザー（遅刻・欠勤）"""
    return {
        user
        for user in known_users(sheet)
        if not isinstance(classify(sheet, user, day, cutoff), OnTime)
    }


def users_on_holiday(sheet: AttendanceState, day: date) -> set[str]:
    return {user for user in sheet["holidays"] if is_on_holiday(sheet, user, day)}


def good_run_length(
    sheet: AttendanceState,
    start: date,
    max_lookback: int = DEFAULT_MAX_LOOKBACK_DAYS,
    cutoff: time = NINE_O_CLOCK,
) -> int:
    """startから遡って遅刻者ゼロの日が何日続いているか（最大max_lookback日）"""
    count = 0
    for day in past_days(start, max_lookback):
        if late_comers(sheet, day, cutoff):
            break
        count += 1
    return count


def chart_dataset(
    sheet: AttendanceState,
    end: date,
    days: int = DEFAULT_CHART_WINDOW_DAYS,
    cutoff: time = NINE_O_CLOCK,
) -> list[tuple[int, int, int]]:
    """グラフ描画用の (日付インデックス, 定時, 遅刻) を古い順に返す"""
    rows = []
    for day in reversed(list(past_days(end, days))):
        index, (on_time, late) = summary_of_day(sheet, day, cutoff)
        rows.append((index, on_time, late))
    return rows
