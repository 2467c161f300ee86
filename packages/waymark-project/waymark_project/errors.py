"""Errors raised while reading project documents."""
from __future__ import annotations

from pathlib import Path

from waymark.types import WaymarkError


class ProjectError(WaymarkError):
    """A project document could not be read, validated or used."""

    def __init__(self, source: Path | str | None, detail: str) -> None:
        name = source.name if isinstance(source, Path) else (source or "<project>")
        super().__init__(f"Cannot load project '{name}'.\n  Cause: {detail}")
        self.source = source
        self.detail = detail
