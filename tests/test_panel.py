import logging
from pathlib import Path

import pytest

from tsp_fix.panel import TspOutcome, read_brightness, reinitialize_tsp


@pytest.mark.parametrize("content, expected", [("120\n", 120), ("0\n", 0), (" 255 ", 255)])
def test_read_brightness(tmp_path: Path, content, expected) -> None:
    node = tmp_path / "brightness"
    node.write_text(content, encoding="utf-8")
    assert read_brightness(str(node)) == expected


@pytest.mark.parametrize("content", ["", "\n", "busy"])
def test_read_brightness_unreadable_content(tmp_path: Path, content) -> None:
    node = tmp_path / "brightness"
    node.write_text(content, encoding="utf-8")
    assert read_brightness(str(node)) is None


def test_read_brightness_missing_node(tmp_path: Path) -> None:
    assert read_brightness(str(tmp_path / "missing")) is None


def test_reinitialize_writes_command_and_reads_result(sysfs: Path, caplog) -> None:
    caplog.set_level(logging.INFO)
    outcome = reinitialize_tsp(str(sysfs / "cmd"), str(sysfs / "cmd_result"))

    assert outcome == TspOutcome(ok=True, response="check_connection:OK")
    assert not outcome.result_unread
    assert (sysfs / "cmd").read_text(encoding="utf-8") == "check_connection\n"
    assert "TSP command result: check_connection:OK" in caplog.text


def test_write_failure_is_failure(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.INFO)
    outcome = reinitialize_tsp(str(tmp_path / "gone" / "cmd"), str(tmp_path / "cmd_result"))

    assert outcome.ok is False
    assert outcome.error
    assert "Failed to write to TSP command file" in caplog.text
    assert "Failed to read TSP command result" not in caplog.text


def test_read_failure_after_write_is_still_success(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.INFO)
    cmd = tmp_path / "cmd"
    outcome = reinitialize_tsp(str(cmd), str(tmp_path / "no_result"), command="run_force_calibration")

    assert outcome.ok is True
    assert outcome.result_unread
    assert cmd.read_text(encoding="utf-8") == "run_force_calibration\n"
    assert "Successfully wrote to TSP command file." in caplog.text
    assert "Failed to read TSP command result" in caplog.text
    assert "Failed to write to TSP command file" not in caplog.text
