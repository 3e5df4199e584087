"""APScheduler-backed notification scheduler for payment reminders."""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable, Iterable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from .models.reminder import PaymentReminder
from .services.notifications import notification_id, notification_message
from .services.reminders import is_cleared_this_month, notification_schedule

logger = logging.getLogger("lifetrack.scheduler")

Deliver = Callable[[str, str], None]
Loader = Callable[[], Iterable[PaymentReminder]]

ALERT_PREFIX = "reminder_"
RESYNC_JOB_ID = "resync_reminders"


def log_delivery(title: str, body: str) -> None:
    """Default delivery: write the alert to the application log."""
    logger.info("%s: %s", title, body)


class ReminderNotifier:
    """Queues one-shot alerts 0..lead_days days before each reminder due date."""

    TITLE = "Payment Reminder"

    def __init__(
        self,
        *,
        deliver: Deliver | None = None,
        lead_days: int = 2,
        hour: int = 9,
        scheduler: BackgroundScheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the notifier.

        Args:
            deliver: Callable receiving (title, body) when an alert fires
            lead_days: How many days before the due date the first alert fires
            hour: Local hour of day alerts fire at
            scheduler: APScheduler instance; a BackgroundScheduler by default
            clock: Source of "now", replaceable in tests
        """
        self.deliver = deliver or log_delivery
        self.lead_days = lead_days
        self.alert_time = time(hour, 0)
        self.scheduler = scheduler or BackgroundScheduler()
        self.clock = clock

    @property
    def running(self) -> bool:
        return bool(self.scheduler.running)

    def start(self) -> None:
        """Start the background scheduler."""
        if self.running:
            logger.warning("Scheduler already running")
            return
        self.scheduler.start()
        logger.info("Reminder scheduler started")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.running:
            self.scheduler.shutdown(wait=True)
            logger.info("Reminder scheduler stopped")

    def schedule(self, reminder: PaymentReminder) -> list[str]:
        """Replace the reminder's pending alerts with fresh ones."""
        self.cancel(reminder)
        now = self.clock()
        if is_cleared_this_month(reminder, now=now):
            logger.debug("Reminder %s already cleared this month", reminder.name)
            return []

        job_ids = []
        for moment, due_at in notification_schedule(
            reminder, now=now, lead_days=self.lead_days, at=self.alert_time
        ):
            job_id = notification_id(reminder, moment)
            self.scheduler.add_job(
                func=self._fire,
                trigger=DateTrigger(run_date=moment),
                args=[self.TITLE, notification_message(reminder, due_at)],
                id=job_id,
                name=f"{reminder.name} alert",
                replace_existing=True,
            )
            job_ids.append(job_id)
        logger.debug("Scheduled %d alert(s) for %s", len(job_ids), reminder.name)
        return job_ids

    def cancel(self, reminder: PaymentReminder) -> None:
        """Remove every pending alert belonging to ``reminder``."""
        prefix = f"{ALERT_PREFIX}{reminder.id}_"
        for job in self.scheduler.get_jobs():
            if job.id.startswith(prefix):
                self._remove(job.id)

    def sync(self, reminders: Iterable[PaymentReminder]) -> int:
        """Make pending alerts mirror ``reminders``; returns the number of queued alerts.

        Alerts of reminders missing from ``reminders`` (deleted elsewhere) are dropped.
        """
        reminders = list(reminders)
        known = {str(reminder.id) for reminder in reminders}
        for job in self.scheduler.get_jobs():
            if not job.id.startswith(ALERT_PREFIX):
                continue
            owner = job.id[len(ALERT_PREFIX):].split("_", 1)[0]
            if owner not in known:
                self._remove(job.id)
        return sum(len(self.schedule(reminder)) for reminder in reminders)

    def watch(self, load: Loader, *, interval_seconds: int = 60) -> int:
        """Sync from ``load`` now and again every ``interval_seconds``.

        Reminders are added, paid and deleted by other processes, so the
        process that fires alerts re-reads the store instead of trusting its
        own queue. Returns the number of alerts queued by the first sync.
        """
        queued = self.sync(load())
        self.scheduler.add_job(
            func=self._resync,
            trigger=IntervalTrigger(seconds=interval_seconds),
            args=[load],
            id=RESYNC_JOB_ID,
            name="Reminder resync",
            replace_existing=True,
        )
        logger.info("Reminder resync every %d seconds", interval_seconds)
        return queued

    def pending_job_ids(self) -> list[str]:
        return sorted(job.id for job in self.scheduler.get_jobs())

    def alert_job_ids(self) -> list[str]:
        return [job_id for job_id in self.pending_job_ids() if job_id.startswith(ALERT_PREFIX)]

    def _remove(self, job_id: str) -> None:
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            # Fired between listing and removal.
            return
        logger.debug("Removed job: %s", job_id)

    def _resync(self, load: Loader) -> None:
        try:
            queued = self.sync(load())
        except Exception as exc:
            logger.error(f"Reminder resync failed: {exc}", exc_info=True)
            return
        logger.info("Reminder resync queued %d alert(s)", queued)

    def _fire(self, title: str, body: str) -> None:
        try:
            self.deliver(title, body)
        except Exception as exc:
            logger.error(f"Reminder delivery failed: {exc}", exc_info=True)
