import logging

import pytest

from tsp_fix.config import Config

LOGGERS = ("tsp_fix", "tsp_fix.debug", "tsp_fix.boot_values", "tsp_fix.network_fix")


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    # setup_logger() detaches these from the root logger; undo so caplog sees them
    for name in LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def sysfs(tmp_path):
    (tmp_path / "brightness").write_text("120\n", encoding="utf-8")
    (tmp_path / "cmd").write_text("", encoding="utf-8")
    (tmp_path / "cmd_result").write_text("check_connection:OK\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def cfg(tmp_path, sysfs):
    return Config(
        brightness_path=str(sysfs / "brightness"),
        tsp_cmd_path=str(sysfs / "cmd"),
        tsp_result_path=str(sysfs / "cmd_result"),
        log_file=str(tmp_path / "tsp_fix_log.txt"),
        debug_log_file=str(tmp_path / "DebugLogTSP.log.txt"),
        boot_values_script=str(tmp_path / "boot_values.py"),
        network_fix_script=str(tmp_path / "network_fix.py"),
        network_fix_delay=0.0,
    )
