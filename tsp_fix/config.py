"""
Settings for the TSP fix service.
- Compiled-in defaults for the Galaxy A02 (SM-A022M) panel and backlight
- Optional overrides from <module dir>/tsp-fix.conf, section [tspfix]
"""

import os, math, configparser
from dataclasses import dataclass, field, fields

DEFAULT_MODULE_DIR = "/data/adb/modules/tsp_fix_a022m"  # must match id= in module.prop
CONF_NAME = "tsp-fix.conf"
SECTION = "tspfix"

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

TRUE_WORDS = ("1", "true", "yes", "on")


def module_dir():
    # Magisk exports MODPATH for service scripts; not always set on every ROM.
    return os.environ.get("MODPATH") or DEFAULT_MODULE_DIR


def conf_path():
    return os.path.join(module_dir(), CONF_NAME)


@dataclass
class Config:
    brightness_path: str = "/sys/class/backlight/panel/brightness"
    tsp_cmd_path: str = "/sys/class/sec/tsp/cmd"
    tsp_result_path: str = "/sys/class/sec/tsp/cmd_result"
    tsp_command: str = "check_connection"
    lockscreen_marker: str = "mDreamingLockscreen=true"
    poll_interval: float = 0.6
    read_backoff: float = 5.0
    network_fix_delay: float = 30.0
    log_file: str = "/data/local/tmp/tsp_fix_log.txt"
    debug_log_file: str = "/data/local/tmp/DebugLogTSP.log.txt"
    boot_values_script: str = os.path.join(PACKAGE_DIR, "boot_values.py")
    network_fix_script: str = os.path.join(PACKAGE_DIR, "network_fix.py")
    debug: bool = False
    # "key: reason" for every override that could not be parsed
    problems: list = field(default_factory=list, compare=False, repr=False)


def _convert(raw, default):
    if isinstance(default, bool):
        return raw.strip().lower() in TRUE_WORDS
    if isinstance(default, float):
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError("must be a finite number")
        if value < 0:
            raise ValueError("must not be negative")
        return value
    return raw.strip()


def load_config(path=None) -> Config:
    """Return defaults overridden by the INI file at *path* (if it exists)."""
    cfg = Config()
    path = path or conf_path()
    if not os.path.exists(path):
        return cfg
    parser = configparser.ConfigParser()
    try:
        parser.read(path)
    except configparser.Error as e:
        cfg.problems.append(f"{path}: {e}")
        return cfg
    sec = parser[SECTION] if SECTION in parser else parser["DEFAULT"]
    for f in fields(Config):
        if f.name == "problems" or f.name not in sec:
            continue
        default = getattr(cfg, f.name)
        try:
            setattr(cfg, f.name, _convert(sec.get(f.name), default))
        except ValueError as e:
            cfg.problems.append(f"{f.name}: {e}")
    return cfg
