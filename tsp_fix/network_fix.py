#!/usr/bin/env python3
"""
Network fix
- Forces global restricted_networking_mode=0
- Started by the TSP fix service after a delay so the settings provider is up
- Falls back to the provider's SQLite database when the settings tool fails
"""

import sys

from tsp_fix import props, statelog

LOG_FILE = "/data/local/tmp/network_fix_log.txt"

NAMESPACE = "global"
RESTRICTED_NETWORKING_KEY = "restricted_networking_mode"
TARGET_RESTRICTED_NETWORKING_MODE = "0"


def read_setting(log, key, db_path=props.SETTINGS_DB):
    current = props.settings_get(NAMESPACE, key)
    if current is not None:
        return current
    log.warning("'settings get' failed or returned empty. Attempting to read via the settings database.")
    if not props.db_available(db_path):
        log.error("Settings database %s not found/accessible for reading.", db_path)
        return None
    current = props.db_get(NAMESPACE, key, db_path=db_path)
    log.info("Read from settings database: '%s'", current or "")
    return current


def write_setting(log, key, value, db_path=props.SETTINGS_DB) -> bool:
    if props.settings_put(NAMESPACE, key, value):
        log.info("%s set successfully using 'settings'.", key)
        return True
    log.warning("'settings put' failed. Attempting to set via the settings database.")
    if not props.db_available(db_path):
        log.error("Settings database %s not found/accessible for writing. Could not set %s.", db_path, key)
        return False
    if props.db_put(NAMESPACE, key, value, db_path=db_path):
        log.info("%s set successfully using the settings database.", key)
        return True
    log.error("Failed to set %s using the settings database.", key)
    return False


def main(log_file=LOG_FILE, db_path=props.SETTINGS_DB) -> int:
    log = statelog.setup_logger(
        "tsp_fix.network_fix", log_file,
        header=f"Network Fix Script Initialized for this boot (at {log_file}).",
    )
    log.info("Starting network_fix execution.")
    key, target = RESTRICTED_NETWORKING_KEY, TARGET_RESTRICTED_NETWORKING_MODE

    log.info("Attempting to get current value for %s.", key)
    current = read_setting(log, key, db_path=db_path)
    log.info("Current %s: '%s'", key, current if current is not None else "<unknown>")

    if current == target:
        log.info("%s already set to %s.", key, target)
        ok = True
    else:
        log.info("Value differs. Setting %s to %s (was '%s').", key, target, current or "<unknown>")
        ok = write_setting(log, key, target, db_path=db_path)

    log.info("Network Fix Script Finished its execution.")
    print(f"network_fix: {'ok' if ok else 'failed'}", flush=True)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
