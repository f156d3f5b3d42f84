"""Device property store and settings provider access (root only)."""

import logging
import os
import sqlite3
import subprocess
from typing import Optional

log = logging.getLogger(__name__)

GETPROP = "getprop"
SETPROP = "setprop"
SETTINGS = "/system/bin/settings"
SETTINGS_DB = "/data/data/com.android.providers.settings/databases/settings.db"
SETTINGS_TABLES = ("global", "secure", "system")
TIMEOUT = 15.0


def _run(args) -> Optional[str]:
    """stdout of *args*, or None if it could not be started or exited non-zero."""
    try:
        result = subprocess.run(
            args, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE,
            text=True, errors="replace", timeout=TIMEOUT,
        )
    except FileNotFoundError:
        log.debug("%s not found", args[0])
        return None
    except subprocess.CalledProcessError as e:
        log.debug("%s exit %s: %s", " ".join(args), e.returncode, (e.stderr or "").strip())
        return None
    except (subprocess.TimeoutExpired, OSError) as e:
        log.debug("%s failed: %s", " ".join(args), e)
        return None
    return result.stdout


# --- Properties --------------------------------------------------------------
def getprop(key: str) -> Optional[str]:
    out = _run([GETPROP, key])
    return None if out is None else out.strip()


def setprop(key: str, value: str) -> bool:
    return _run([SETPROP, key, value]) is not None


# --- Settings provider -------------------------------------------------------
def settings_get(namespace: str, key: str) -> Optional[str]:
    """Value via the settings tool; None for failures, empty output and "null"."""
    out = _run([SETTINGS, "get", namespace, key])
    if out is None:
        return None
    value = out.strip()
    if not value or value == "null":
        return None
    return value


def settings_put(namespace: str, key: str, value: str) -> bool:
    return _run([SETTINGS, "put", namespace, key, value]) is not None


def _check_table(table: str) -> None:
    if table not in SETTINGS_TABLES:
        raise ValueError(f"unknown settings table {table!r}")


def db_available(db_path: str = SETTINGS_DB) -> bool:
    return os.path.isfile(db_path) and os.access(db_path, os.R_OK)


def db_get(table: str, key: str, db_path: str = SETTINGS_DB) -> Optional[str]:
    """Read *key* straight from the provider database (fallback path)."""
    _check_table(table)
    if not db_available(db_path):
        log.debug("settings database %s not accessible", db_path)
        return None
    try:
        conn = sqlite3.connect(db_path)
        try:
            row = conn.execute(f"SELECT value FROM {table} WHERE name = ?", (key,)).fetchone()
        finally:
            conn.close()
    except sqlite3.Error as e:
        log.debug("settings database read %s/%s: %s", table, key, e)
        return None
    return None if row is None or row[0] is None else str(row[0])


def db_put(table: str, key: str, value: str, db_path: str = SETTINGS_DB) -> bool:
    """UPDATE the row for *key*, INSERT it if the provider never wrote one."""
    _check_table(table)
    if not db_available(db_path):
        log.debug("settings database %s not accessible", db_path)
        return False
    try:
        conn = sqlite3.connect(db_path)
        try:
            with conn:
                cur = conn.execute(f"UPDATE {table} SET value = ? WHERE name = ?", (value, key))
                if cur.rowcount == 0:
                    conn.execute(f"INSERT INTO {table} (name, value) VALUES (?, ?)", (key, value))
        finally:
            conn.close()
    except sqlite3.Error as e:
        log.debug("settings database write %s/%s: %s", table, key, e)
        return False
    return True
