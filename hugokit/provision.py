from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from rich.console import Console

from .commands import Command, CommandExecutor, SubprocessExecutor
from .config import (
    CONFIG_FILES,
    CONTENT_COMMIT_MESSAGE,
    DEPLOY_COMMIT_MESSAGE,
    DEPLOY_FILES,
    GITHUB_USERNAME_PROMPT,
    INITIAL_COMMIT_MESSAGE,
    SITE_GENERATOR,
    THEME_PATH,
    THEME_URL,
    VERSION_CONTROL,
    WEBSITE_NAME_PROMPT,
)
from .scaffold import ScaffoldError, SiteOptions, render_site_files, require_text
from .tools import Locator, ToolError, ensure_tools, has_admin_privileges

Prompt = Callable[[str], str]


@dataclass(frozen=True)
class ProvisionReport:
    site_dir: Path
    github_username: str
    base_url: str
    files: tuple[Path, ...]
    commits: tuple[str, ...]
    installed: tuple[str, ...]


class ProvisionError(RuntimeError):
    pass


class PreconditionError(ProvisionError):
    pass


@contextmanager
def preserved_cwd() -> Iterator[Path]:
    """Yield the current directory and chdir back to it on exit, whatever happens."""
    origin = Path.cwd()
    try:
        yield origin
    finally:
        os.chdir(origin)


def _git(*args: str) -> Command:
    return Command(VERSION_CONTROL, tuple(args))


class Provisioner:
    def __init__(
        self,
        executor: CommandExecutor | None = None,
        console: Console | None = None,
        locator: Locator | None = None,
        is_elevated: Callable[[], bool] = has_admin_privileges,
    ):
        self.executor = executor or SubprocessExecutor()
        self.console = console or Console()
        self.locator = locator
        self.is_elevated = is_elevated
        self._commits: list[str] = []

    def run(self, prompt: Prompt) -> ProvisionReport:
        """Provision a new site in the current directory.

        Raises PreconditionError for guard failures (steps before any file is
        written) and ProvisionError for anything that fails afterwards. Files
        already written are left on disk.
        """
        self._commits = []
        with preserved_cwd() as origin:
            try:
                return self._run(origin, prompt)
            except ProvisionError:
                raise
            except Exception as error:
                raise ProvisionError(str(error) or type(error).__name__) from error

    def _run(self, origin: Path, prompt: Prompt) -> ProvisionReport:
        if not self.is_elevated():
            raise PreconditionError("Administrator privileges are required to install tools. Re-run elevated.")

        try:
            installed = ensure_tools(self.executor, self.locator, self.console)
        except ToolError as error:
            raise PreconditionError(str(error)) from error

        options = self.collect_inputs(prompt)

        site_dir = origin / options.website_name
        if site_dir.exists():
            raise PreconditionError(f"Target path already exists: {site_dir}")

        self._step(f"Creating Hugo site {options.website_name}")
        self.executor.run(Command(SITE_GENERATOR, ("new", "site", options.website_name, "--format", "yaml")))
        if not site_dir.is_dir():
            raise ProvisionError(f"{SITE_GENERATOR} did not create {site_dir}")
        os.chdir(site_dir)

        self._step("Initializing git repository")
        self.executor.run(_git("init"))
        self._commit(INITIAL_COMMIT_MESSAGE)

        self._step("Adding theme submodule")
        self.executor.run(_git("submodule", "add", "--depth=1", THEME_URL, THEME_PATH))
        self.executor.run(_git("submodule", "update", "--init", "--recursive"))

        # The generator's default hugo.yaml is replaced wholesale.
        self._step("Writing site configuration and content pages")
        files = render_site_files(site_dir, options, CONFIG_FILES)
        self._commit(CONTENT_COMMIT_MESSAGE)

        self._step("Writing footer partial and deploy workflow")
        files += render_site_files(site_dir, options, DEPLOY_FILES)
        self._commit(DEPLOY_COMMIT_MESSAGE)

        self.console.print(f"[green]Site ready at {site_dir}[/green]")
        return ProvisionReport(
            site_dir=site_dir,
            github_username=options.github_username,
            base_url=options.base_url,
            files=tuple(files),
            commits=tuple(self._commits),
            installed=installed,
        )

    def collect_inputs(self, prompt: Prompt) -> SiteOptions:
        try:
            website_name = require_text(prompt(WEBSITE_NAME_PROMPT), "Website name")
            github_username = require_text(prompt(GITHUB_USERNAME_PROMPT), "GitHub username")
        except ScaffoldError as error:
            raise PreconditionError(str(error)) from error
        return SiteOptions(website_name=website_name, github_username=github_username)

    def _commit(self, message: str) -> None:
        self.executor.run(_git("add", "."))
        self.executor.run(_git("commit", "-m", message))
        self._commits.append(message)

    def _step(self, message: str) -> None:
        self.console.print(f"[cyan]{message}...[/cyan]")


def next_steps(report: ProvisionReport) -> list[str]:
    name = report.site_dir.name
    return [
        f"Create an empty repository named {name} at https://github.com/new",
        f"cd {name}",
        f"git remote add origin https://github.com/{report.github_username}/{name}.git",
        "git branch -M main",
        "git push -u origin main",
        "In the repository settings, serve GitHub Pages from the gh-pages branch",
        "Preview locally with: hugo server -D",
    ]
