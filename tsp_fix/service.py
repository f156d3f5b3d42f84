#!/usr/bin/env python3
"""
TSP fix service (Magisk late_start service, Galaxy A02)
- Resets its logs on every boot (tsp_fix_log.txt + DebugLogTSP.log.txt)
- Runs the boot values script once, network fix 30s later in the background
- Watches backlight brightness; on any change (0 included) while the lock
  screen is showing, writes check_connection to the TSP driver
- Loads settings from <module dir>/tsp-fix.conf
"""

import enum
import os
import signal
import subprocess
import sys
import threading
from dataclasses import dataclass
from functools import partial
from typing import Optional

from . import config, lockscreen, panel, statelog
from .monitor import BrightnessMonitor

LOGGER = "tsp_fix"
DEBUG_LOGGER = "tsp_fix.debug"


# --- Collaborator scripts ----------------------------------------------------
class Status(enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOT_FOUND = "not found"


@dataclass(frozen=True)
class CollaboratorResult:
    status: Status
    returncode: Optional[int] = None


def script_command(script: str):
    if script.endswith(".sh"):
        return ["sh", script]
    path = os.path.abspath(script)
    if os.path.dirname(path) == config.PACKAGE_DIR:
        # our own modules need the package importable, not tsp_fix/ as sys.path[0]
        name = os.path.splitext(os.path.basename(path))[0]
        return [sys.executable, "-m", f"tsp_fix.{name}"]
    return [sys.executable, script]


def script_env():
    """Environment for collaborators: the package's parent dir goes first on PYTHONPATH."""
    env = dict(os.environ)
    parent = os.path.dirname(config.PACKAGE_DIR)
    extra = env.get("PYTHONPATH")
    env["PYTHONPATH"] = parent + (os.pathsep + extra if extra else "")
    return env


def run_collaborator(script: str, debug) -> CollaboratorResult:
    """Run *script* to completion; its stdout/stderr go to the debug log."""
    if not os.path.isfile(script):
        return CollaboratorResult(Status.NOT_FOUND)
    name = os.path.basename(script)
    debug.info("Running %s", script)
    try:
        result = subprocess.run(
            script_command(script), stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
            text=True, errors="replace", env=script_env(),
        )
    except OSError as e:
        debug.error("%s could not be started: %s", name, e)
        return CollaboratorResult(Status.FAILED)
    statelog.log_output(debug, result.stdout, prefix=f"[{name}] ")
    debug.info("%s exited with %s", name, result.returncode)
    if result.returncode != 0:
        return CollaboratorResult(Status.FAILED, result.returncode)
    return CollaboratorResult(Status.SUCCEEDED, 0)


def run_boot_values(cfg, log, debug) -> CollaboratorResult:
    script = cfg.boot_values_script
    log.debug("Expected path for boot values script: %s", script)
    result = run_collaborator(script, debug)
    if result.status is Status.NOT_FOUND:
        log.error("Boot values script NOT found at %s.", script)
        log.info("STATUS: boot values script was NOT found to execute.")
    elif result.status is Status.FAILED:
        log.warning("Boot values script returned non-zero exit code: %s.", result.returncode)
        log.info("STATUS: boot values script did NOT run successfully or had an issue starting.")
    else:
        log.info("STATUS: boot values script completed successfully. Check %s for its output.", cfg.debug_log_file)
    return result


def _deferred_network_fix(script, log, debug):
    try:
        result = run_collaborator(script, debug)
        log.debug("network fix finished: %s (exit %s)", result.status.value, result.returncode)
    except Exception:
        log.exception("network fix task crashed")


def schedule_network_fix(cfg, log, debug) -> Optional[threading.Timer]:
    """Fire-and-forget: start the network fix after cfg.network_fix_delay seconds."""
    script = cfg.network_fix_script
    if not os.path.isfile(script):
        log.error("Network fix script NOT found at %s. Cannot schedule network fix.", script)
        return None
    log.debug("Starting network fix in background with a %s-second delay.", cfg.network_fix_delay)
    timer = threading.Timer(cfg.network_fix_delay, _deferred_network_fix, args=(script, log, debug))
    timer.daemon = True
    timer.start()
    log.debug("Network fix scheduled for delayed execution. Check %s for its output.", cfg.debug_log_file)
    return timer


# --- Signal Handling ---------------------------------------------------------
def install_signal_handlers(log):
    def _stop(signum, _frame):
        log.info("Received signal %s, exiting.", signum)
        raise SystemExit(0)
    signal.signal(signal.SIGTERM, _stop)
    signal.signal(signal.SIGINT, _stop)


def build_monitor(cfg, initial: int) -> BrightnessMonitor:
    return BrightnessMonitor(
        initial,
        sample=partial(panel.read_brightness, cfg.brightness_path),
        lockscreen_active=partial(lockscreen.is_lockscreen_active, cfg.lockscreen_marker),
        reinitialize=partial(panel.reinitialize_tsp, cfg.tsp_cmd_path, cfg.tsp_result_path, cfg.tsp_command),
        poll_interval=cfg.poll_interval,
        read_backoff=cfg.read_backoff,
        source=cfg.brightness_path,
    )


def main():
    cfg = config.load_config()
    log = statelog.setup_logger(LOGGER, cfg.log_file, verbose=cfg.debug)
    debug = statelog.setup_logger(
        DEBUG_LOGGER, cfg.debug_log_file, header="Debug Log initialized for this boot.", verbose=cfg.debug,
    )
    log.info(statelog.SEPARATOR)
    log.info("TSP Fix Script Started (Magisk Service - Lock Screen Specific).")
    log.debug("Module directory (resolved): %s", config.module_dir())
    for problem in cfg.problems:
        log.warning("Ignoring config value %s", problem)

    run_boot_values(cfg, log, debug)

    initial = panel.read_brightness(cfg.brightness_path)
    if initial is None:
        log.critical("Could not read initial brightness from %s. Exiting script.", cfg.brightness_path)
        raise SystemExit(1)
    log.info("Initial brightness for TSP monitoring: %s", initial)

    schedule_network_fix(cfg, log, debug)

    install_signal_handlers(log)
    log.debug(
        "RUN poll=%ss backoff=%ss tsp=%s debug=%s",
        cfg.poll_interval, cfg.read_backoff, cfg.tsp_cmd_path, cfg.debug,
    )
    build_monitor(cfg, initial).run()


if __name__ == "__main__":
    main()
