from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import GITHUB_USERNAME_PROMPT, WEBSITE_NAME_PROMPT
from .provision import PreconditionError, ProvisionError, Provisioner, next_steps
from .tools import probe_tools
from .verify import VerifyError, analyze_site

app = typer.Typer(help="Provision Hugo sites ready for GitHub Pages.")
console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2


class OutputFormat(str, Enum):
    table = "table"
    json = "json"
    md = "md"


def _json_print(payload: dict) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=True, sort_keys=True))


def _print_key_value_table(title: str, rows: list[tuple[str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Field")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(key, value)
    console.print(table)


def _emit_success(
    command: str,
    output_format: OutputFormat,
    data: dict,
    md_renderer: Callable[[dict], str] | None = None,
    table_renderer: Callable[[dict], None] | None = None,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": True,
                "command": command,
                "exit_code": EXIT_OK,
                "data": data,
            }
        )
        return

    if output_format == OutputFormat.md and md_renderer is not None:
        console.print(md_renderer(data))
        return

    if output_format == OutputFormat.table and table_renderer is not None:
        table_renderer(data)
        return

    if output_format == OutputFormat.md:
        lines = [f"# {command}", ""]
        lines.extend(f"- **{key}**: {value}" for key, value in data.items())
        console.print("\n".join(lines))
    else:
        _print_key_value_table(
            title=command,
            rows=[(str(key), str(value)) for key, value in data.items()],
        )


def _emit_error(
    command: str,
    output_format: OutputFormat,
    exit_code: int,
    code: str,
    message: str,
) -> None:
    if output_format == OutputFormat.json:
        _json_print(
            {
                "ok": False,
                "command": command,
                "exit_code": exit_code,
                "error": {
                    "code": code,
                    "message": message,
                },
            }
        )
    elif output_format == OutputFormat.md:
        console.print(f"# {command}\n\n- **status**: error\n- **code**: {code}\n- **message**: {message}")
    else:
        console.print(f"[red]Error ({code}):[/red] {message}")

    raise typer.Exit(code=exit_code)


def build_provisioner() -> Provisioner:
    return Provisioner(console=console)


@app.command("new")
def new_site(
    name: Optional[str] = typer.Option(None, "--name", help="Website name. Prompted for when omitted."),
    username: Optional[str] = typer.Option(None, "--username", help="GitHub username. Prompted for when omitted."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Install missing tools, scaffold a Hugo site and commit it with a deploy workflow."""
    answers = {WEBSITE_NAME_PROMPT: name, GITHUB_USERNAME_PROMPT: username}

    def ask(question: str) -> str:
        preset = answers.get(question)
        if preset is not None:
            return preset
        # An empty default makes a blank answer return instead of re-prompting.
        return typer.prompt(question, default="", show_default=False)

    try:
        report = build_provisioner().run(ask)
    except PreconditionError as error:
        _emit_error(
            command="new",
            output_format=output_format,
            exit_code=EXIT_INVALID_INPUT,
            code="precondition_failed",
            message=str(error),
        )
        raise
    except ProvisionError as error:
        _emit_error(
            command="new",
            output_format=output_format,
            exit_code=EXIT_ERROR,
            code="provision_failed",
            message=str(error),
        )
        raise

    data = {
        "path": str(report.site_dir),
        "base_url": report.base_url,
        "files": [path.relative_to(report.site_dir).as_posix() for path in report.files],
        "commits": list(report.commits),
        "installed": list(report.installed),
        "next_steps": next_steps(report),
    }

    def render_md(payload: dict) -> str:
        lines = [f"# Site created: `{payload['path']}`", ""]
        lines.append(f"- **base_url**: {payload['base_url']}")
        lines.append(f"- **files**: {', '.join(payload['files'])}")
        lines.append("\n## Next steps")
        lines.extend(f"{idx}. {step}" for idx, step in enumerate(payload["next_steps"], start=1))
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        _print_key_value_table(
            title="Site created",
            rows=[
                ("path", payload["path"]),
                ("base_url", payload["base_url"]),
                ("files", ", ".join(payload["files"])),
                ("installed", ", ".join(payload["installed"]) if payload["installed"] else "-"),
            ],
        )
        console.print("[bold]Next steps:[/bold]")
        for idx, step in enumerate(payload["next_steps"], start=1):
            console.print(f"{idx}. {step}")

    _emit_success(command="new", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("doctor")
def doctor(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Report which required tools are on PATH without installing anything."""
    statuses = probe_tools()
    data = {
        "ready": all(status.present for status in statuses),
        "tools": [
            {"name": status.name, "present": status.present, "path": status.path or ""}
            for status in statuses
        ],
    }

    def render_table(payload: dict) -> None:
        table = Table(title="Required tools")
        table.add_column("Tool")
        table.add_column("Status")
        table.add_column("Path")
        for item in payload["tools"]:
            status = "[green]found[/green]" if item["present"] else "[red]missing[/red]"
            table.add_row(item["name"], status, item["path"] or "-")
        console.print(table)

    _emit_success(command="doctor", output_format=output_format, data=data, table_renderer=render_table)


@app.command("verify")
def verify_site(
    site_path: Path = typer.Argument(..., help="Path to a provisioned site."),
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
):
    """Check that a site contains every file written during provisioning."""
    try:
        report = analyze_site(site_path)
    except VerifyError as error:
        _emit_error(
            command="verify",
            output_format=output_format,
            exit_code=EXIT_INVALID_INPUT,
            code="verify_error",
            message=str(error),
        )
        raise

    data = {
        "site_dir": str(report.site_dir),
        "base_url": report.base_url or "",
        "present": list(report.present),
        "missing": list(report.missing),
    }

    def render_md(payload: dict) -> str:
        lines = [f"# Verify report: `{payload['site_dir']}`", ""]
        lines.append(f"- **base_url**: {payload['base_url'] or 'unset'}")
        lines.append(f"- **missing_count**: {len(payload['missing'])}")
        if payload["missing"]:
            lines.append("\n## Missing")
            lines.extend(f"- `{item}`" for item in payload["missing"])
        return "\n".join(lines)

    def render_table(payload: dict) -> None:
        console.print(f"[bold]Base URL:[/bold] {payload['base_url'] or 'unset'}")
        if payload["missing"]:
            console.print("[yellow]Missing site files:[/yellow]")
            for item in payload["missing"]:
                console.print(f"- {item}")
        else:
            console.print("[green]All site files present.[/green]")

    _emit_success(command="verify", output_format=output_format, data=data, md_renderer=render_md, table_renderer=render_table)


@app.command("version")
def version(
    output_format: OutputFormat = typer.Option(OutputFormat.table, "--format", help="Output format."),
) -> None:
    """Print version."""
    _emit_success(command="version", output_format=output_format, data={"version": __version__})


if __name__ == "__main__":
    app()
