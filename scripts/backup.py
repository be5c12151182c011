"""Dump the attendance tables to backups/<database>_<timestamp>.sql via `mysqldump`."""

from __future__ import annotations

import importlib
import os
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.ravisabha_attendance.ravisabha_attendance.database.connection import DBConfig

TABLES = ("members", "ravisabha_details", "attendance_records")


def main() -> None:
    if shutil.which("mysqldump") is None:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools.")

    settings = importlib.import_module(get_settings_module())
    db = DBConfig.from_dict(settings.DB_CONFIG)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db.database}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    # Password goes through the environment so it never shows up in `ps`.
    env = dict(os.environ, MYSQL_PWD=db.password)
    cmd = [
        "mysqldump",
        f"--host={db.host}",
        f"--port={db.port}",
        f"--user={db.user}",
        f"--default-character-set={db.charset}",
        "--single-transaction",
        db.database,
        *TABLES,
    ]

    with out_file.open("wb") as f:
        result = subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, env=env)
    if result.returncode != 0:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"mysqldump failed: {result.stderr.decode(errors='replace').strip()}")

    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
