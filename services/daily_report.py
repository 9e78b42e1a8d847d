# services/daily_report.py
from datetime import date, time

from graph.state import AttendanceState
from services.queries import (
    DEFAULT_MAX_LOOKBACK_DAYS,
    good_run_length,
    late_comers,
    summary_of_day,
    users_on_holiday,
)
from services.timing import NINE_O_CLOCK


MESSAGES = {
    "summary": "📊 {day} の出勤状況: 定時 {on_time}名 / 遅刻 {late}名",
    "late_comers": "⏰ 遅刻・未チェックイン: {users}",
    "all_on_time": "🎉 全員定時にチェックインしました",
    "on_holiday": "🏖 休暇中: {users}",
    "good_run": "連続達成日数: {count}日",
}


def _mentions(users) -> str:
    return " ".join(f"<@{user}>" for user in sorted(users))


def build_daily_report(
    sheet: AttendanceState,
    day: date,
    cutoff: time = NINE_O_CLOCK,
    max_lookback: int = DEFAULT_MAX_LOOKBACK_DAYS,
) -> str:
    """指定日の出勤状況レポート（Slack投稿用テキスト）を組み立てる"""
    _, (on_time, late) = summary_of_day(sheet, day, cutoff)
    lines = [MESSAGES["summary"].format(day=day.isoformat(), on_time=on_time, late=late)]

    comers = late_comers(sheet, day, cutoff)
    if comers:
        lines.append(MESSAGES["late_comers"].format(users=_mentions(comers)))
    else:
        lines.append(MESSAGES["all_on_time"])

    holiday_users = users_on_holiday(sheet, day)
    if holiday_users:
        lines.append(MESSAGES["on_holiday"].format(users=_mentions(holiday_users)))

    count = good_run_length(sheet, day, max_lookback=max_lookback, cutoff=cutoff)
    lines.append(MESSAGES["good_run"].format(count=count))

    return "\n".join(lines)
