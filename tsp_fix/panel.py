"""Backlight and touch sensor panel (TSP) access through sysfs."""

import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)


# --- Backlight ---------------------------------------------------------------
def read_brightness(path: str) -> Optional[int]:
    """Current backlight level, or None if the node could not be read.

    Zero is a real level (panel off); None means "no sample this time".
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = f.read().strip()
    except OSError as e:
        log.debug("brightness read %s: %s", path, e)
        return None
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        log.debug("brightness read %s: unexpected content %r", path, raw)
        return None


# --- TSP ---------------------------------------------------------------------
@dataclass(frozen=True)
class TspOutcome:
    ok: bool
    response: Optional[str] = None
    error: Optional[str] = None

    @property
    def result_unread(self) -> bool:
        # command accepted, but cmd_result could not be read back
        return self.ok and self.response is None


def reinitialize_tsp(cmd_path: str, result_path: str, command: str = "check_connection") -> TspOutcome:
    """Send *command* to the TSP driver and capture its answer.

    Only the write decides success; the result node is diagnostic output.
    """
    log.info("Attempting TSP fix: Writing '%s' to %s", command, cmd_path)
    try:
        with open(cmd_path, "w", encoding="utf-8") as f:
            f.write(f"{command}\n")
    except OSError as e:
        log.error("Failed to write to TSP command file (%s): %s. Check permissions or path.", cmd_path, e)
        return TspOutcome(ok=False, error=str(e))
    log.info("Successfully wrote to TSP command file.")

    try:
        with open(result_path, encoding="utf-8") as f:
            response = f.read().strip()
    except OSError as e:
        log.error("Failed to read TSP command result from %s: %s", result_path, e)
        return TspOutcome(ok=True, error=str(e))
    log.info("TSP command result: %s", response)
    return TspOutcome(ok=True, response=response)
