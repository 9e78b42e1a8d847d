"""勤怠チェックインエージェント - エントリーポイント"""
import signal
import sys
import time
import os

from dotenv import load_dotenv

from graph.graph import build_graph
from graph.state import new_attendance_state
from services.calendar_utils import parse_time, yesterday
from services.config_loader import load_config
from services.daily_report import build_daily_report
from services.event_log import EventLog, load_state
from services.event_processor import EventProcessor
from services.slack_client import SlackNotifier, ConsoleNotifier
from schedulers.scheduler import ReportScheduler


def create_services(config: dict):
    """設定に基づいてサービスインスタンスを生成"""
    load_dotenv()

    # イベントログ
    log_config = config["event_log"]
    event_log = EventLog(os.getenv("EVENT_LOG_PATH", log_config["path"]))

    # Slack通知
    slack_config = config["slack"]
    slack_token = os.getenv("SLACK_BOT_TOKEN", "")
    slack_channel = os.getenv("SLACK_NOTIFY_CHANNEL", slack_config.get("notify_channel", ""))
    if slack_config["enabled"] and slack_token:
        notifier = SlackNotifier(token=slack_token, channel=slack_channel)
    else:
        notifier = ConsoleNotifier()

    return event_log, notifier


def run_report(processor: EventProcessor, notifier, config: dict):
    """前日分の日次レポートを送信"""
    cutoff = parse_time(config["time_rules"]["on_time_cutoff"])
    max_lookback = config["queries"]["max_lookback_days"]
    report = build_daily_report(
        processor.snapshot(), yesterday(), cutoff=cutoff, max_lookback=max_lookback
    )
    notifier.send(report)


def main():
    """メイン起動処理"""
    config = load_config("config.yaml")
    event_log, notifier = create_services(config)

    # イベントログ再生
    sheet = load_state(
        event_log, new_attendance_state(), on_malformed=config["event_log"]["on_malformed"]
    )
    print(f"[勤怠エージェント] {event_log.path} から {len(sheet['checkins'])}件のチェックインを復元しました")

    event_notifier = notifier if config["slack"]["notify_events"] else None
    graph = build_graph(event_log=event_log, notifier=event_notifier)
    processor = EventProcessor(graph, sheet, notifier=notifier)
    processor.start()

    def report_job():
        try:
            run_report(processor, notifier, config)
        except Exception as e:
            print(f"[勤怠エージェント] レポート作成中にエラー: {e}", file=sys.stderr)
            notifier.send_error(str(e))

    scheduler_config = config["scheduler"]
    scheduler = ReportScheduler(
        report_time=scheduler_config["report_time"],
        job_func=report_job,
        days=scheduler_config["report_days"],
    )
    scheduler.start()
    print(f"[勤怠エージェント] 日次レポートを {scheduler_config['report_time']} に送信します")

    # シグナルハンドリング
    def shutdown(signum, frame):
        print("\n[勤怠エージェント] 停止中...")
        scheduler.stop()
        processor.stop()
        print("[勤怠エージェント] 停止しました")
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    # 標準入力からイベント行（タグ\tUNIX秒\tユーザーID）を受け付ける
    print("[勤怠エージェント] Ctrl+Cで停止します")
    try:
        for line in sys.stdin:
            if line.strip():
                processor.submit(raw=line)
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        shutdown(None, None)


if __name__ == "__main__":
    main()
