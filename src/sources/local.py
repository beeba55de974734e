"""Loading declaration documents from the local filesystem."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from models.diff import DiffSource

if TYPE_CHECKING:
    from config.loader import DtsDiffConfig


class SourceLoadError(Exception):
    """Raised when a local declaration document cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read source {path}: {reason}")


def load_source(file_path: str | Path, tag: str | None = None) -> DiffSource:
    """Load a local ``.d.ts`` file as a ``DiffSource``.

    Args:
        file_path: File to read (UTF-8)
        tag: Optional version label; the file name is used when omitted

    Raises:
        SourceLoadError: If the file cannot be read.
    """
    path = Path(file_path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceLoadError(path, exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise SourceLoadError(path, str(exc)) from exc
    return DiffSource(tag=tag, document_name=path.name, content=content)


def load_configured_sources(root: Path, config: DtsDiffConfig) -> list[DiffSource]:
    """Load every version named by the config, local sources first."""
    from sources.remote import fetch_remote_sources

    sources = [
        load_source(root / source_def.path, source_def.tag)
        for source_def in config.sources
    ]
    if config.remote is not None:
        sources.extend(fetch_remote_sources(root, config.remote))
    return sources
