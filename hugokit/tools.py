from __future__ import annotations

import ctypes
import os
import shutil
import sys
from dataclasses import dataclass
from typing import Callable, Optional

from rich.console import Console

from .commands import Command, CommandError, CommandExecutor
from .config import INSTALL_PACKAGES, PACKAGE_MANAGER, PACKAGE_MANAGER_INSTALL_URL, REQUIRED_TOOLS

Locator = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ToolStatus:
    name: str
    path: str | None

    @property
    def present(self) -> bool:
        return self.path is not None


class ToolError(RuntimeError):
    pass


def has_admin_privileges() -> bool:
    if sys.platform.startswith("win"):
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0


def probe_tools(locator: Locator | None = None) -> tuple[ToolStatus, ...]:
    lookup = locator or shutil.which
    return tuple(ToolStatus(name=name, path=lookup(name)) for name in REQUIRED_TOOLS)


def ensure_tools(
    executor: CommandExecutor,
    locator: Locator | None = None,
    console: Console | None = None,
) -> tuple[str, ...]:
    """Make sure every required tool is on PATH.

    The package manager cannot install itself, so its absence is fatal. Other
    tools are installed through it once and looked up again; if they are still
    missing the run stops. Returns the names of the tools that were installed.
    """
    lookup = locator or shutil.which
    out = console or Console()

    if lookup(PACKAGE_MANAGER) is None:
        raise ToolError(
            f"{PACKAGE_MANAGER} is not installed. Install it first: {PACKAGE_MANAGER_INSTALL_URL}"
        )
    out.print(f"[green]Found {PACKAGE_MANAGER}.[/green]")

    installed: list[str] = []
    for name, package in INSTALL_PACKAGES.items():
        if lookup(name) is not None:
            out.print(f"[green]Found {name}.[/green]")
            continue

        out.print(f"[yellow]{name} not found, installing {package} with {PACKAGE_MANAGER}...[/yellow]")
        try:
            executor.run(Command(PACKAGE_MANAGER, ("install", package, "-y")))
        except CommandError as error:
            raise ToolError(f"Failed to install {name}: {error}") from error

        if lookup(name) is None:
            raise ToolError(f"{name} is still not available after installation. Open a new shell and retry.")
        out.print(f"[green]Installed {name}.[/green]")
        installed.append(name)

    return tuple(installed)
