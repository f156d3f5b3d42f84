import subprocess
import sys

from tsp_fix import lockscreen

DUMP = """ACTIVITY MANAGER ACTIVITIES (dumpsys activity activities)
  mSleeping=true
  mDreamingLockscreen=true mDismissKeyguard=false
"""


def _fake_run(stdout="", exc=None):
    def run(args, **kwargs):
        if exc is not None:
            raise exc
        return subprocess.CompletedProcess(args, 0, stdout=stdout)
    return run


def test_marker_present(monkeypatch) -> None:
    monkeypatch.setattr(lockscreen.subprocess, "run", _fake_run(DUMP))
    assert lockscreen.is_lockscreen_active() is True


def test_marker_absent(monkeypatch) -> None:
    monkeypatch.setattr(lockscreen.subprocess, "run", _fake_run(DUMP.replace("=true mD", "=false mD")))
    assert lockscreen.is_lockscreen_active() is False


def test_tool_missing_means_not_locked(monkeypatch) -> None:
    monkeypatch.setattr(lockscreen.subprocess, "run", _fake_run(exc=FileNotFoundError("dumpsys")))
    assert lockscreen.is_lockscreen_active() is False


def test_timeout_means_not_locked(monkeypatch) -> None:
    monkeypatch.setattr(lockscreen.subprocess, "run", _fake_run(exc=subprocess.TimeoutExpired("dumpsys", 5)))
    assert lockscreen.is_lockscreen_active() is False


def test_real_command_output() -> None:
    cmd = [sys.executable, "-c", "print('  mDreamingLockscreen=true')"]
    assert lockscreen.is_lockscreen_active(command=cmd) is True


def test_failing_command_means_not_locked() -> None:
    cmd = [sys.executable, "-c", "print('mDreamingLockscreen=true'); raise SystemExit(2)"]
    assert lockscreen.is_lockscreen_active(command=cmd) is False


def test_custom_marker() -> None:
    cmd = [sys.executable, "-c", "print('mShowingLockscreen=true')"]
    assert lockscreen.is_lockscreen_active("mShowingLockscreen=true", command=cmd) is True
    assert lockscreen.is_lockscreen_active(command=cmd) is False
