#!/usr/bin/env python3
"""
Boot values
- Sets persist.sys.overlay.devinputjack=true when it drifted
- Runs once per boot, started by the TSP fix service (exit code is checked)
- restricted_networking_mode lives in network_fix (needs a fully booted system)
"""

import sys

from tsp_fix import props, statelog

LOG_FILE = "/data/local/tmp/boot_values_log.txt"

OVERLAY_DEVINPUTJACK_KEY = "persist.sys.overlay.devinputjack"
TARGET_OVERLAY_DEVINPUTJACK = "true"


def ensure_prop(log, key, target) -> bool:
    log.info("Attempting to get current value for %s.", key)
    current = props.getprop(key)
    log.info("Current %s: '%s'", key, current if current is not None else "")
    if current == target:
        log.info("%s already set to %s.", key, target)
        return True
    log.info("Value differs. Setting %s to %s (was '%s').", key, target, current or "")
    if props.setprop(key, target):
        log.info("%s set successfully.", key)
        return True
    log.error("Failed to set %s.", key)
    return False


def main(log_file=LOG_FILE) -> int:
    log = statelog.setup_logger(
        "tsp_fix.boot_values", log_file,
        header=f"Primary Log Initialized for this boot (at {log_file}).",
    )
    log.info("Boot Values Configuration Started.")
    ok = ensure_prop(log, OVERLAY_DEVINPUTJACK_KEY, TARGET_OVERLAY_DEVINPUTJACK)
    log.info("Boot Values Script Finished its execution.")
    # the service reads this from stdout into its debug log
    print(f"boot_values: {'ok' if ok else 'failed'}", flush=True)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
