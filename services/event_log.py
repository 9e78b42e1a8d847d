# services/event_log.py
import sys
import threading
from pathlib import Path

from graph.events import MalformedEventRecord, TimeSheetEvent, format_event, parse_event
from graph.nodes.apply_event_node import replay_events
from graph.state import AttendanceState


def _decode_line(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedEventRecord(f"UTF-8として読めない行です: {raw!r}") from e


class EventLog:
    """タブ区切りのイベントログ（1行1イベント、追記のみ）"""

    def __init__(self, path: str):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: TimeSheetEvent) -> None:
        line = format_event(event)
        with self._lock:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def read_events(self, on_malformed: str = "skip") -> list[TimeSheetEvent]:
        """全行を解析してイベントのリストを返す

        on_malformed="skip" なら不正行を報告して読み飛ばし、
        "abort" なら最初の不正行で MalformedEventRecord を送出する。
        """
        if not self._path.exists():
            return []

        events = []
        # 行単位でデコードし、不正なバイト列も1行の不正として扱う
        with open(self._path, "rb") as f:
            for lineno, raw in enumerate(f, start=1):
                try:
                    line = _decode_line(raw)
                    if not line.strip():
                        continue
                    events.append(parse_event(line))
                except MalformedEventRecord as e:
                    if on_malformed == "abort":
                        raise MalformedEventRecord(f"{self._path}:{lineno}: {e}") from e
                    print(
                        f"[勤怠エージェント] 不正なイベント行をスキップ {self._path}:{lineno}: {e}",
                        file=sys.stderr,
                    )
        return events


def load_state(
    event_log: EventLog,
    sheet: AttendanceState,
    on_malformed: str = "skip",
) -> AttendanceState:
    """イベントログを再生して勤怠状態を復元する（全行解析後に適用）"""
    events = event_log.read_events(on_malformed=on_malformed)
    return replay_events(events, sheet)
