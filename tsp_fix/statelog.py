"""Per-subsystem log files that are reset at start and kept world-writable."""

import logging
import os
import stat
import sys

LOG_MODE = 0o666
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SEPARATOR = "-" * 52


def repair(path: str) -> None:
    """Create *path* if it vanished and restore mode 0666 if it was changed."""
    if not os.path.exists(path):
        with open(path, "a", encoding="utf-8"):
            pass
    if stat.S_IMODE(os.stat(path).st_mode) != LOG_MODE:
        os.chmod(path, LOG_MODE)


def reset(path: str) -> None:
    """Truncate *path* for this boot and make it world-writable."""
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    with open(path, "w", encoding="utf-8"):
        pass
    os.chmod(path, LOG_MODE)


class PermissiveFileHandler(logging.Handler):
    """Append one line per record, repairing the file before every write.

    Other tools (and the user over adb) may delete the file or reset its
    mode while we run, so no stream is kept open between records.
    """

    terminator = "\n"

    def __init__(self, filename: str, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.baseFilename = os.path.abspath(filename)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            try:
                repair(self.baseFilename)
            except OSError as e:
                # the append below may still succeed (e.g. chmod denied by SELinux)
                print(f"WARN repair {self.baseFilename}: {e}", file=sys.stderr, flush=True)
            with open(self.baseFilename, "a", encoding="utf-8") as fh:
                fh.write(msg + self.terminator)
        except Exception:
            self.handleError(record)


def setup_logger(
    name: str,
    log_file: str,
    header: str = "Primary Log initialized for this boot.",
    verbose: bool = False,
) -> logging.Logger:
    """Reset *log_file* and bind logger *name* to it.

    Args:
        name: Logger name, one per subsystem
        log_file: Backing file, truncated here exactly once per run
        header: Line written after the separator once the file is fresh
        verbose: Also echo records to stdout (ends up in logcat)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    try:
        reset(log_file)
    except OSError as e:
        # The handler recreates the file on the first record if it can.
        print(f"WARN reset {log_file}: {e}", file=sys.stderr, flush=True)

    file_handler = PermissiveFileHandler(log_file)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        logger.addHandler(console)

    logger.info(SEPARATOR)
    logger.info(header)
    return logger


def log_output(logger: logging.Logger, text: str, prefix: str = "") -> None:
    """Write captured child-process output into *logger*, one record per line."""
    for line in (text or "").splitlines():
        if line.strip():
            logger.debug("%s%s", prefix, line.rstrip())
