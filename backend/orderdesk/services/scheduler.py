"""
Scheduled jobs (APScheduler).

Only one job runs today: a daily snapshot of the SQLite database file.
"""

import os
import sqlite3
import logging
from datetime import datetime
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from orderdesk.core.config import settings

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "auto_backup_"

scheduler: Optional[AsyncIOScheduler] = None


def get_db_path(uri: Optional[str] = None) -> str:
    """Filesystem path of the SQLite database"""
    db_url = uri or settings.SQLITE_DATABASE_URI
    for prefix in ("sqlite+aiosqlite:///", "sqlite:///"):
        if db_url.startswith(prefix):
            return db_url[len(prefix):]
    return "./orderdesk.db"


def get_backup_dir(db_path: Optional[str] = None) -> str:
    db_path = db_path or get_db_path()
    backup_dir = os.path.join(os.path.dirname(os.path.abspath(db_path)), "backups")
    os.makedirs(backup_dir, exist_ok=True)
    return backup_dir


def auto_backup(db_path: Optional[str] = None, keep_count: Optional[int] = None) -> Optional[str]:
    """Snapshot the database; returns the backup path or None when skipped"""
    db_path = db_path or get_db_path()
    try:
        if not os.path.exists(db_path):
            logger.warning(f"Database file not found: {db_path}")
            return None

        backup_dir = get_backup_dir(db_path)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = os.path.join(backup_dir, f"{BACKUP_PREFIX}{timestamp}.db")

        # sqlite3's online backup gives a consistent copy while the app is writing
        source = sqlite3.connect(db_path)
        target = sqlite3.connect(backup_path)
        try:
            source.backup(target)
        finally:
            target.close()
            source.close()

        size_mb = os.stat(backup_path).st_size / 1024 / 1024
        logger.info(f"✅ Backup written: {os.path.basename(backup_path)} ({size_mb:.2f} MB)")

        cleanup_old_backups(backup_dir, keep_count=keep_count or settings.AUTO_BACKUP_KEEP_COUNT)
        return backup_path
    except (OSError, sqlite3.Error) as e:
        logger.error(f"❌ Backup failed: {e}")
        return None


def cleanup_old_backups(backup_dir: str, keep_count: int = 7) -> int:
    """Keep the newest ``keep_count`` automatic backups; returns how many were removed"""
    backups = sorted(
        (name for name in os.listdir(backup_dir) if name.startswith(BACKUP_PREFIX) and name.endswith(".db")),
        reverse=True,
    )
    removed = 0
    for name in backups[keep_count:]:
        try:
            os.remove(os.path.join(backup_dir, name))
            removed += 1
            logger.info(f"🗑️ Removed old backup: {name}")
        except OSError as e:
            logger.warning(f"Could not remove backup {name}: {e}")
    return removed


def init_scheduler():
    """Start the scheduler when backups are enabled"""
    global scheduler

    if not settings.AUTO_BACKUP_ENABLED:
        logger.info("📦 Automatic backup disabled")
        return

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        auto_backup,
        trigger=CronTrigger(
            hour=settings.AUTO_BACKUP_HOUR,
            minute=settings.AUTO_BACKUP_MINUTE
        ),
        id="auto_backup",
        name="Daily database backup",
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"⏰ Scheduler started - daily backup at {settings.AUTO_BACKUP_HOUR:02d}:{settings.AUTO_BACKUP_MINUTE:02d}")


def shutdown_scheduler():
    global scheduler
    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("⏰ Scheduler stopped")
