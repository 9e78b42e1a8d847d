# graph/events.py
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Union


class MalformedEventRecord(ValueError):
    """永続化形式として解釈できないイベント行"""


# どのUTCオフセットでもローカル日付とその翌日がdateの範囲に収まる区間
MIN_INSTANT = datetime(1, 1, 2, tzinfo=timezone.utc)
MAX_INSTANT = datetime(9999, 12, 30, tzinfo=timezone.utc)

_FORBIDDEN_USER_CHARS = ("\t", "\r", "\n")


@dataclass(frozen=True)
class _Event:
    user: str
    instant: datetime

    def __post_init__(self):
        if any(c in self.user for c in _FORBIDDEN_USER_CHARS):
            raise MalformedEventRecord(f"ユーザーIDにタブ・改行は使えません: {self.user!r}")

        # UTC・秒単位に正規化（naiveはUTCとみなす）
        instant = self.instant
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        try:
            instant = instant.astimezone(timezone.utc).replace(microsecond=0)
        except OverflowError as e:
            raise MalformedEventRecord(f"時刻が範囲外です: {self.instant!r}") from e
        if not MIN_INSTANT <= instant < MAX_INSTANT:
            raise MalformedEventRecord(f"時刻が範囲外です: {instant.isoformat()}")

        object.__setattr__(self, "instant", instant)


@dataclass(frozen=True)
class CheckIn(_Event):
    """チェックイン"""


@dataclass(frozen=True)
class MarkInactive(_Event):
    """指定時刻の時点で非アクティブ（翌日から休暇）"""


@dataclass(frozen=True)
class MarkActive(_Event):
    """指定時刻の時点でアクティブ（休暇終了）"""


TimeSheetEvent = Union[CheckIn, MarkInactive, MarkActive]

EVENT_TAGS = {
    CheckIn: "checkin",
    MarkActive: "active",
    MarkInactive: "inactive",
}
EVENT_TYPES = {tag: cls for cls, tag in EVENT_TAGS.items()}

LABELS = {
    CheckIn: "チェックイン",
    MarkInactive: "休暇開始",
    MarkActive: "休暇終了",
}

_EPOCH_RE = re.compile(r"-?\d+")


def format_event(event: TimeSheetEvent) -> str:
    """イベントを「タグ\\tUNIX秒\\tユーザーID」形式に変換"""
    seconds = math.floor(event.instant.timestamp())
    return f"{EVENT_TAGS[type(event)]}\t{seconds}\t{event.user}"


def parse_event(line: str) -> TimeSheetEvent:
    """永続化形式の1行をイベントに変換する"""
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) != 3:
        raise MalformedEventRecord(f"フィールド数が不正です: {line!r}")

    tag, seconds, user = fields
    if tag not in EVENT_TYPES:
        raise MalformedEventRecord(f"不明なイベント種別です: {tag!r}")
    if not _EPOCH_RE.fullmatch(seconds):
        raise MalformedEventRecord(f"タイムスタンプが不正です: {seconds!r}")

    try:
        instant = datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedEventRecord(f"タイムスタンプが範囲外です: {seconds!r}") from e

    return EVENT_TYPES[tag](user, instant)


def event_from_triple(user: str, instant: datetime, kind: str) -> TimeSheetEvent:
    """外部ソースの(ユーザー, 時刻, 種別)からイベントを生成"""
    if kind not in EVENT_TYPES:
        raise MalformedEventRecord(f"不明なイベント種別です: {kind!r}")
    return EVENT_TYPES[kind](user, instant)


def describe_event(event: TimeSheetEvent, tz: tzinfo) -> str:
    local = event.instant.astimezone(tz)
    return f"{LABELS[type(event)]}: {event.user} {local.strftime('%H:%M')}"
