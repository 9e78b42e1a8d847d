from datetime import date, datetime, timedelta, timezone

from graph.events import CheckIn, MarkInactive
from graph.nodes.apply_event_node import replay_events
from graph.state import new_attendance_state
from services.queries import (
    chart_dataset,
    good_run_length,
    known_users,
    late_comers,
    summary_of_day,
    users_on_holiday,
)

JST = timezone(timedelta(hours=9))


def _at(day, hour, minute=0):
    return datetime(2026, 2, day, hour, minute, tzinfo=JST)


def _sheet(*events):
    return replay_events(events, new_attendance_state(JST))


def test_known_users():
    """チェックインしたユーザーのみが対象になること"""
    sheet = _sheet(
        CheckIn("A", _at(23, 8, 0)),
        CheckIn("A", _at(24, 8, 0)),
        CheckIn("B", _at(24, 9, 15)),
        MarkInactive("C", _at(24, 18, 0)),
    )
    assert known_users(sheet) == {"A", "B"}


def test_summary_and_late_comers():
    """定時1名・遅刻1名、未チェックインのユーザーは数えないこと"""
    day = date(2026, 2, 24)
    sheet = _sheet(
        CheckIn("A", _at(24, 8, 30)),
        CheckIn("B", _at(24, 9, 15)),
        CheckIn("C", _at(23, 8, 0)),
    )
    assert summary_of_day(sheet, day) == (day.toordinal(), [1, 1])
    # Cは当日チェックインなしのため遅刻者に含まれる
    assert late_comers(sheet, day) == {"B", "C"}


def test_late_comers_scenario():
    """A 08:30・B 09:15 のとき遅刻者はBのみ"""
    day = date(2026, 2, 24)
    sheet = _sheet(CheckIn("A", _at(24, 8, 30)), CheckIn("B", _at(24, 9, 15)))
    assert late_comers(sheet, day) == {"B"}


def test_summary_empty_sheet():
    """チェックインがなければ0件"""
    day = date(2026, 2, 24)
    assert summary_of_day(new_attendance_state(JST), day) == (day.toordinal(), [0, 0])


def _good_run_sheet():
    # 20日はBが遅刻、21〜23日は全員定時
    events = [CheckIn("A", _at(20, 8, 0)), CheckIn("B", _at(20, 9, 30))]
    for day in (21, 22, 23):
        events += [CheckIn("A", _at(day, 8, 0)), CheckIn("B", _at(day, 8, 45))]
    return _sheet(*events)


def test_good_run_length():
    """遅刻者ゼロの日が3日続いた後に遅刻日があれば3"""
    assert good_run_length(_good_run_sheet(), date(2026, 2, 23)) == 3


def test_good_run_length_bounded():
    """遡る日数の上限で打ち切られること"""
    assert good_run_length(_good_run_sheet(), date(2026, 2, 23), max_lookback=2) == 2


def test_good_run_length_starts_on_bad_day():
    """開始日に遅刻者がいれば0"""
    assert good_run_length(_good_run_sheet(), date(2026, 2, 20)) == 0


def test_good_run_length_no_users():
    """既知ユーザーがいなければ上限値を返すこと"""
    sheet = new_attendance_state(JST)
    assert good_run_length(sheet, date(2026, 2, 23), max_lookback=30) == 30


def test_users_on_holiday():
    """休暇期間中のユーザーを返すこと"""
    sheet = _sheet(MarkInactive("C", _at(24, 18, 0)))
    assert users_on_holiday(sheet, date(2026, 2, 24)) == set()
    assert users_on_holiday(sheet, date(2026, 2, 25)) == {"C"}


def test_chart_dataset():
    """古い順に (日付インデックス, 定時, 遅刻) を返すこと"""
    rows = chart_dataset(_good_run_sheet(), date(2026, 2, 23), days=4)
    assert rows == [
        (date(2026, 2, 20).toordinal(), 1, 1),
        (date(2026, 2, 21).toordinal(), 2, 0),
        (date(2026, 2, 22).toordinal(), 2, 0),
        (date(2026, 2, 23).toordinal(), 2, 0),
    ]


def test_chart_dataset_default_window():
    """既定では20日分"""
    rows = chart_dataset(new_attendance_state(JST), date(2026, 2, 23))
    assert len(rows) == 20
    assert rows[-1][0] == date(2026, 2, 23).toordinal()
