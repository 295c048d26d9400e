import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """Start the overdue-reminder job in a background thread.

    Skipped when SCHEDULER_ENABLED is off and in the debug reloader's
    watcher process (only the WERKZEUG_RUN_MAIN child runs jobs).
    """
    if not app.config.get("SCHEDULER_ENABLED", False):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader parent process: scheduler skipped.")
        return None

    from libris.tasks.overdue_check import run_overdue_check_job

    minutes = int(app.config.get("REMINDER_INTERVAL_MINUTES", 60))
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        func=run_overdue_check_job,
        args=[app],
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_check_job",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=120,
    )
    scheduler.start()
    app.extensions["apscheduler"] = scheduler
    app.logger.info(f"[scheduler] Overdue check started (every {minutes} minutes).")
    return scheduler
