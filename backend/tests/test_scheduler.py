import os
import sqlite3

from orderdesk.services import scheduler


def make_database(path):
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE things (id INTEGER PRIMARY KEY, name TEXT)")
    conn.execute("INSERT INTO things (name) VALUES ('widget')")
    conn.commit()
    conn.close()


def test_get_db_path_strips_driver_prefix():
    assert scheduler.get_db_path("sqlite:///./data/app.db") == "./data/app.db"
    assert scheduler.get_db_path("sqlite+aiosqlite:////srv/app.db") == "/srv/app.db"


def test_auto_backup_copies_database(tmp_path):
    db_path = str(tmp_path / "app.db")
    make_database(db_path)

    backup_path = scheduler.auto_backup(db_path, keep_count=3)
    assert backup_path is not None
    assert os.path.dirname(backup_path) == str(tmp_path / "backups")

    conn = sqlite3.connect(backup_path)
    try:
        assert conn.execute("SELECT name FROM things").fetchall() == [("widget",)]
    finally:
        conn.close()


def test_auto_backup_skips_missing_database(tmp_path):
    assert scheduler.auto_backup(str(tmp_path / "missing.db")) is None


def test_cleanup_keeps_newest_backups(tmp_path):
    for day in range(1, 6):
        (tmp_path / f"auto_backup_2024010{day}_030000_000000.db").write_bytes(b"")
    (tmp_path / "manual.db").write_bytes(b"")

    assert scheduler.cleanup_old_backups(str(tmp_path), keep_count=2) == 3
    assert sorted(os.listdir(tmp_path)) == [
        "auto_backup_20240104_030000_000000.db",
        "auto_backup_20240105_030000_000000.db",
        "manual.db",
    ]


def test_scheduler_not_started_when_disabled(monkeypatch):
    monkeypatch.setattr(scheduler.settings, "AUTO_BACKUP_ENABLED", False)
    scheduler.init_scheduler()
    assert scheduler.scheduler is None
