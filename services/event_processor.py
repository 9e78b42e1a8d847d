# services/event_processor.py
import queue
import sys
import threading
from typing import Optional

from graph.events import TimeSheetEvent
from graph.state import AttendanceState

_STOP = object()


class EventProcessor:
    """勤怠状態への書き込みを1スレッドに直列化するイベント処理ループ

    状態はapply_eventが毎回新しく作るため、snapshot()で得た値は
    以後変更されない。
    """

    def __init__(self, graph, sheet: AttendanceState, notifier=None):
        self._graph = graph
        self._sheet = sheet
        self._notifier = notifier
        self._lock = threading.Lock()
        self._queue: queue.Queue = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    def snapshot(self) -> AttendanceState:
        with self._lock:
            return self._sheet

    def submit(self, raw: Optional[str] = None, event: Optional[TimeSheetEvent] = None):
        """イベント（または永続化形式の行）を処理キューに積む"""
        self._queue.put((raw, event))

    def _process(self, raw: Optional[str] = None, event: Optional[TimeSheetEvent] = None) -> dict:
        """1件をグラフに流し、適用された場合のみ状態を差し替える

        読み出しと差し替えの間はロックしないため、ワーカースレッドからのみ呼ぶこと。
        """
        result = self._graph.invoke({
            "raw": raw,
            "event": event,
            "sheet": self.snapshot(),
            "action_taken": None,
            "error_message": None,
        })
        if result["action_taken"] == "applied":
            with self._lock:
                self._sheet = result["sheet"]
        return result

    def _run(self):
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._process(*item)
            except Exception as e:
                print(f"[勤怠エージェント] イベント処理中にエラー: {e}", file=sys.stderr)
                if self._notifier is not None:
                    self._notifier.send_error(str(e))
            finally:
                self._queue.task_done()

    def join(self):
        """キューに積まれたイベントをすべて処理し終えるまで待つ"""
        self._queue.join()

    def start(self):
        self._thread = threading.Thread(target=self._run, name="event-processor", daemon=True)
        self._thread.start()

    def stop(self):
        if self._thread is None:
            return
        self._queue.put(_STOP)
        self._thread.join()
        self._thread = None
