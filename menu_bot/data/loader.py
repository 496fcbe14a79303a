"""Read the menu configuration and the credential roster from disk."""

from __future__ import annotations

import csv
import json
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import MenuConfig


def resolve_path(path: str | Path) -> Path:
    """Return ``path``, or ``../path`` when a relative path is missing.

    This lets the bot start both from the repository root and from a
    subdirectory such as ``tests/``.
    """
    candidate = Path(path)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    parent = Path("..") / candidate
    return parent if parent.exists() else candidate


def load_config(path: str | Path) -> MenuConfig:
    """Decode and validate the JSON configuration tree at ``path``."""
    resolved = resolve_path(path)
    try:
        with open(resolved, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {resolved}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config {resolved} is not valid JSON: {exc}") from exc
    try:
        return MenuConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"config {resolved} is invalid:\n{exc}") from exc


def load_roster_records(path: str | Path) -> list[tuple[str, str, str]]:
    """Read ``surname,given name,secret`` rows from the CSV file at ``path``.

    Blank lines are skipped and extra columns ignored.  An empty file yields
    an empty list; rejecting it is up to :meth:`Roster.load`.
    """
    resolved = resolve_path(path)
    records: list[tuple[str, str, str]] = []
    try:
        with open(resolved, encoding="utf-8", newline="") as f:
            for lineno, row in enumerate(csv.reader(f), start=1):
                cells = [cell.strip() for cell in row]
                if not any(cells):
                    continue
                if len(cells) < 3:
                    raise ConfigError(
                        f"{resolved}:{lineno}: expected 3 columns, got {len(cells)}"
                    )
                records.append((cells[0], cells[1], cells[2]))
    except OSError as exc:
        raise ConfigError(f"cannot read roster {resolved}: {exc}") from exc
    except csv.Error as exc:
        raise ConfigError(f"roster {resolved} is not valid CSV: {exc}") from exc
    return records
