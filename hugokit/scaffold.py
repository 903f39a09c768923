from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import SITE_TEMPLATES, THEME_NAME, templates_root


@dataclass(frozen=True)
class SiteOptions:
    website_name: str
    github_username: str

    @property
    def base_url(self) -> str:
        return build_base_url(self.github_username, self.website_name)


class ScaffoldError(RuntimeError):
    pass


def build_base_url(github_username: str, website_name: str) -> str:
    return f"https://{github_username}.github.io/{website_name}/"


def require_text(value: str, label: str) -> str:
    text = value.strip()
    if not text:
        raise ScaffoldError(f"{label} cannot be empty.")
    return text


def yaml_scalar(value: str, style: str | None = None) -> str:
    """Render ``value`` as a YAML scalar that loads back as the same string."""
    dumped = yaml.safe_dump({"v": value}, default_style=style, allow_unicode=True, width=2**31)
    return dumped.strip().partition(": ")[2]


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_root())),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["yaml_scalar"] = yaml_scalar
    return env


def render_site_files(site_dir: Path, options: SiteOptions, files: Iterable[str]) -> list[Path]:
    """Render the named site files into ``site_dir``, replacing existing ones."""
    env = _environment()
    context = {
        "website_name": options.website_name,
        "github_username": options.github_username,
        "base_url": options.base_url,
        "theme_name": THEME_NAME,
    }

    written: list[Path] = []
    for relative in files:
        if relative not in SITE_TEMPLATES:
            raise ScaffoldError(f"No template for site file: {relative}")

        destination_file = site_dir / relative
        destination_file.parent.mkdir(parents=True, exist_ok=True)

        rendered = env.get_template(SITE_TEMPLATES[relative]).render(**context)
        destination_file.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")
        written.append(destination_file)

    return written
