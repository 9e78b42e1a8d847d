# schedulers/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from typing import Callable


class ReportScheduler:
    """APSchedulerによる日次レポートの定期実行管理"""

    def __init__(self, report_time: str, job_func: Callable, days: str = "mon-fri"):
        hour, minute = map(int, report_time.split(":"))
        self._report_time = report_time
        self._job_func = job_func
        self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self._job_func,
            trigger=CronTrigger(day_of_week=days, hour=hour, minute=minute),
            id="daily_report",
            replace_existing=True,
        )

    def start(self):
        """スケジューラ開始"""
        self._scheduler.start()

    def stop(self):
        """スケジューラ停止"""
        self._scheduler.shutdown(wait=False)
