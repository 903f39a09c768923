from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .config import MANAGED_FILES


@dataclass(frozen=True)
class SiteReport:
    site_dir: Path
    present: tuple[str, ...]
    missing: tuple[str, ...]
    base_url: str | None


class VerifyError(RuntimeError):
    pass


def _load_base_url(config_path: Path) -> str | None:
    if not config_path.exists():
        return None
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as error:
        raise VerifyError(f"Could not parse {config_path}: {error}") from error
    if not isinstance(data, dict):
        raise VerifyError(f"Unexpected document shape in {config_path}")
    value = data.get("baseURL")
    return str(value) if value is not None else None


def analyze_site(site_path: Path) -> SiteReport:
    root = site_path.resolve()
    if not root.exists() or not root.is_dir():
        raise VerifyError(f"Site path does not exist: {root}")

    present = sorted(path for path in MANAGED_FILES if (root / path).is_file())
    missing = sorted(path for path in MANAGED_FILES if not (root / path).is_file())

    return SiteReport(
        site_dir=root,
        present=tuple(present),
        missing=tuple(missing),
        base_url=_load_base_url(root / "hugo.yaml"),
    )
