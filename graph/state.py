from typing import TypedDict, Optional
from datetime import date, datetime, time, tzinfo

from graph.events import TimeSheetEvent
from graph.holidays import Holiday


class AttendanceState(TypedDict):
    checkins: dict[tuple[str, date], time]  # (ユーザー, ローカル日付) → その日最初のチェックイン時刻
    holidays: dict[str, list[Holiday]]      # ユーザー → 休暇スタック（新しい順）
    timezone: tzinfo                        # 起動時に固定したローカルタイムゾーン


class EventPipelineState(TypedDict):
    raw: Optional[str]                      # 永続化形式の1行
    event: Optional[TimeSheetEvent]         # 解析済みイベント
    sheet: AttendanceState                  # 適用前 / 適用後の勤怠状態
    action_taken: Optional[str]             # "applied" / "rejected"
    error_message: Optional[str]            # エラー詳細


def new_attendance_state(tz: Optional[tzinfo] = None) -> AttendanceState:
    """空の勤怠状態を生成する（tz省略時は現在のローカルタイムゾーンを固定）"""
    if tz is None:
        tz = datetime.now().astimezone().tzinfo
    return {
        "checkins": {},
        "holidays": {},
        "timezone": tz,
    }
