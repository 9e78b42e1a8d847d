# graph/nodes/apply_event_node.py
from datetime import timedelta
from typing import Iterable

from graph.events import CheckIn, MarkActive, MarkInactive, TimeSheetEvent
from graph.holidays import end_holiday, start_holiday
from graph.state import AttendanceState, EventPipelineState
from services.calendar_utils import to_local


def _apply_in_place(event: TimeSheetEvent, checkins: dict, holidays: dict, tz) -> None:
    day, time_of_day = to_local(event.instant, tz)

    if isinstance(event, CheckIn):
        key = (event.user, day)
        current = checkins.get(key)
        if current is None or time_of_day < current:
            checkins[key] = time_of_day

    elif isinstance(event, MarkInactive):
        # イベント当日の翌日から休暇扱い
        stack = holidays.get(event.user, [])
        holidays[event.user] = start_holiday(day + timedelta(days=1), stack)

    elif isinstance(event, MarkActive):
        stack = holidays.get(event.user)
        if stack:
            holidays[event.user] = end_holiday(day, stack)


def apply_event(event: TimeSheetEvent, state: AttendanceState) -> AttendanceState:
    """イベントを適用した新しい勤怠状態を返す（元の状態は変更しない）"""
    checkins = dict(state["checkins"])
    holidays = dict(state["holidays"])
    _apply_in_place(event, checkins, holidays, state["timezone"])
    return {
        "checkins": checkins,
        "holidays": holidays,
        "timezone": state["timezone"],
    }


def replay_events(events: Iterable[TimeSheetEvent], state: AttendanceState) -> AttendanceState:
    """イベント列をまとめて適用する（状態のコピーは1回のみ）"""
    checkins = dict(state["checkins"])
    holidays = dict(state["holidays"])
    for event in events:
        _apply_in_place(event, checkins, holidays, state["timezone"])
    return {
        "checkins": checkins,
        "holidays": holidays,
        "timezone": state["timezone"],
    }


def apply_event_node(state: EventPipelineState) -> dict:
    """解析済みイベントを勤怠状態に適用するノード"""
    return {
        "sheet": apply_event(state["event"], state["sheet"]),
        "action_taken": "applied",
        "error_message": None,
    }
