from pathlib import Path

import pytest
from rich.console import Console

from hugokit.commands import Command, CommandError
from hugokit.config import GITHUB_USERNAME_PROMPT, INSTALL_PACKAGES, REQUIRED_TOOLS, WEBSITE_NAME_PROMPT
from hugokit.provision import Provisioner


class FakeExecutor:
    """Records commands and imitates the side effects the provisioner relies on."""

    def __init__(self, available=REQUIRED_TOOLS, fail_on=None, creates_site=True, install_works=True):
        self.available = set(available)
        self.fail_on = fail_on
        self.creates_site = creates_site
        self.install_works = install_works
        self.commands: list[Command] = []

    def locate(self, name: str):
        return f"/usr/bin/{name}" if name in self.available else None

    def run(self, command: Command) -> None:
        self.commands.append(command)
        if self.fail_on is not None and str(command).startswith(self.fail_on):
            raise CommandError(f"Command `{command}` exited with code 1", command, 1)

        if command.program == "choco" and command.args[:1] == ("install",) and self.install_works:
            for tool, package in INSTALL_PACKAGES.items():
                if package == command.args[1]:
                    self.available.add(tool)

        if command.program == "hugo" and command.args[:2] == ("new", "site") and self.creates_site:
            site = Path.cwd() / command.args[2]
            site.mkdir()
            (site / "hugo.yaml").write_text("baseURL: https://example.org/\ntitle: My New Hugo Site\n", encoding="utf-8")

    def rendered(self) -> list[str]:
        return [str(command) for command in self.commands]


def answers(name: str, username: str):
    mapping = {WEBSITE_NAME_PROMPT: name, GITHUB_USERNAME_PROMPT: username}
    return lambda question: mapping[question]


def make_provisioner(executor: FakeExecutor, elevated: bool = True, console: Console | None = None) -> Provisioner:
    return Provisioner(
        executor=executor,
        console=console or Console(quiet=True),
        locator=executor.locate,
        is_elevated=lambda: elevated,
    )


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return Path.cwd()
