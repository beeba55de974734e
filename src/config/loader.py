from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.report import REPORT_JSON

CONFIG_FILENAME = "dtsdiff.toml"


class SourceDef(BaseModel):
    """A local declaration file to include in the version sequence."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(description="Path to a .d.ts file, relative to the root")
    tag: str | None = Field(
        default=None, description="Version label (default: the file name)"
    )


class RemoteConfig(BaseModel):
    """Versions fetched over HTTP, one URL per tag."""

    model_config = ConfigDict(extra="forbid")

    url_template: str = Field(description="URL with a '{tag}' placeholder")
    tags: list[str] = Field(default_factory=list, description="Version tags")
    document_name: str = Field(
        default="index.d.ts", description="Document name reported for each tag"
    )
    cache_dir: str | None = Field(
        default=None, description="Directory caching fetched documents by tag"
    )
    sort_tags: bool = Field(
        default=True, description="Order tags numerically before diffing"
    )

    @field_validator("url_template")
    @classmethod
    def validate_url_template(cls, v: str) -> str:
        if "{tag}" not in v:
            msg = "url_template must contain a '{tag}' placeholder"
            raise ValueError(msg)
        return v


class DtsDiffConfig(BaseModel):
    """Configuration for a dtsdiff run."""

    model_config = ConfigDict(extra="forbid")

    output: str = Field(
        default=REPORT_JSON,
        description="Report path, relative to the root",
    )
    treat_first_version_as_baseline: bool = Field(
        default=False,
        description="Seed timelines with every declaration of the first version",
    )
    sources: list[SourceDef] = Field(
        default_factory=list,
        description="Local versions, oldest first",
    )
    remote: RemoteConfig | None = Field(
        default=None,
        description="Remote versions, appended after local sources",
    )


class ConfigError(Exception):
    """Raised when configuration or session input is invalid."""


def resolve_output_path(root: Path, output: str) -> Path:
    """Resolve a config-provided report path safely within the root.

    Absolute paths and paths that escape the root are rejected.
    """
    if not output:
        msg = "output must be a non-empty relative path"
        raise ConfigError(msg)

    if output.startswith("~") or Path(output).is_absolute():
        msg = "output must be a relative path within the root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output '{output}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output '{output}' escapes the root directory"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> DtsDiffConfig:
    """Load configuration from dtsdiff.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DtsDiffConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DtsDiffConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
