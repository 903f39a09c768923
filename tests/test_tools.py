import ctypes
import os
import sys

import pytest

from conftest import FakeExecutor
from hugokit.tools import ToolError, ensure_tools, has_admin_privileges, probe_tools


@pytest.mark.parametrize(("euid", "expected"), [(0, True), (1000, False)])
def test_admin_privileges_on_posix_follow_effective_uid(monkeypatch, euid: int, expected: bool):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setattr(os, "geteuid", lambda: euid, raising=False)

    assert has_admin_privileges() is expected


@pytest.mark.parametrize(("flag", "expected"), [(1, True), (0, False)])
def test_admin_privileges_on_windows_ask_the_shell(monkeypatch, flag: int, expected: bool):
    class Shell32:
        @staticmethod
        def IsUserAnAdmin():
            return flag

    class WinDLL:
        shell32 = Shell32()

    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setattr(ctypes, "windll", WinDLL(), raising=False)

    assert has_admin_privileges() is expected


def test_probe_tools_reports_each_required_tool():
    executor = FakeExecutor(available=("git",))

    statuses = {status.name: status for status in probe_tools(executor.locate)}

    assert set(statuses) == {"choco", "hugo", "git"}
    assert statuses["git"].present is True
    assert statuses["hugo"].path is None


def test_ensure_tools_without_package_manager_raises():
    executor = FakeExecutor(available=())

    with pytest.raises(ToolError, match="choco is not installed"):
        ensure_tools(executor, executor.locate)
