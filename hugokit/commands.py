from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Command:
    program: str
    args: tuple[str, ...] = ()
    expected_code: int = 0

    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv())


class CommandError(RuntimeError):
    def __init__(self, message: str, command: Command, returncode: int | None = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


class CommandExecutor(Protocol):
    def run(self, command: Command) -> None: ...


class SubprocessExecutor:
    """Run commands in the current working directory, inheriting stdio.

    There is no timeout: a hung installer or generator blocks the caller.
    """

    def run(self, command: Command) -> None:
        # Resolve through PATH so .cmd/.bat shims work on Windows without a shell.
        executable = shutil.which(command.program) or command.program
        try:
            completed = subprocess.run([executable, *command.args], check=False)
        except FileNotFoundError as error:
            raise CommandError(f"Executable not found: {command.program}", command) from error

        if completed.returncode != command.expected_code:
            raise CommandError(
                f"Command `{command}` exited with code {completed.returncode}",
                command,
                completed.returncode,
            )
