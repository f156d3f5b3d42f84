"""Lock screen detection via the activity manager."""

import logging
import subprocess

log = logging.getLogger(__name__)

DUMPSYS = ["dumpsys", "activity", "activities"]
MARKER = "mDreamingLockscreen=true"
TIMEOUT = 5.0


def is_lockscreen_active(marker: str = MARKER, command=None, timeout: float = TIMEOUT) -> bool:
    """True only if the activity dump reports the dreaming lock screen.

    Any failure to query counts as "not on the lock screen".
    """
    command = command or DUMPSYS
    try:
        result = subprocess.run(
            command, check=True, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL,
            text=True, errors="replace", timeout=timeout,
        )
    except FileNotFoundError:
        log.warning("%s not found; assuming lock screen is not active.", command[0])
        return False
    except subprocess.CalledProcessError as e:
        log.warning("%s exited with %s; assuming lock screen is not active.", " ".join(command), e.returncode)
        return False
    except subprocess.TimeoutExpired:
        log.warning("%s timed out after %ss; assuming lock screen is not active.", " ".join(command), timeout)
        return False
    except OSError as e:
        log.warning("%s failed: %s; assuming lock screen is not active.", " ".join(command), e)
        return False
    return marker in (result.stdout or "")
