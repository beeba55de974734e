from __future__ import annotations

from pathlib import Path

import pytest

from config.loader import ConfigError, load_config, resolve_output_path


def _write_config(root: Path, toml_content: str) -> None:
    (root / "dtsdiff.toml").write_text(toml_content, encoding="utf-8")


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.output == "api-diff.json"
    assert config.treat_first_version_as_baseline is False
    assert config.sources == []
    assert config.remote is None


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    assert load_config(tmp_path).output == "api-diff.json"


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_source_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[[sources]]
path = "v1.d.ts"
label = "1.0"
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "[[sources]\npath = ")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_remote_template_requires_tag_placeholder(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[remote]
url_template = "https://example.invalid/index.d.ts"
tags = ["1.0.0"]
""".strip(),
    )

    with pytest.raises(ConfigError, match="placeholder"):
        load_config(tmp_path)


def test_valid_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
output = "reports/diff.json"
treat_first_version_as_baseline = true

[[sources]]
path = "v1.d.ts"
tag = "1.0"

[[sources]]
path = "v2.d.ts"

[remote]
url_template = "https://example.invalid/{tag}/index.d.ts"
tags = ["1.10.0", "1.9.0"]
document_name = "vscode.d.ts"
cache_dir = ".cache"
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.output == "reports/diff.json"
    assert config.treat_first_version_as_baseline is True
    assert [(s.path, s.tag) for s in config.sources] == [
        ("v1.d.ts", "1.0"),
        ("v2.d.ts", None),
    ]
    assert config.remote is not None
    assert config.remote.tags == ["1.10.0", "1.9.0"]
    assert config.remote.document_name == "vscode.d.ts"
    assert config.remote.sort_tags is True


def test_resolve_output_path_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="escapes the root"):
        resolve_output_path(tmp_path, "../outside.json")


def test_resolve_output_path_rejects_absolute(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="relative path"):
        resolve_output_path(tmp_path, str(tmp_path / "abs.json"))


def test_resolve_output_path_inside_root(tmp_path: Path) -> None:
    resolved = resolve_output_path(tmp_path, "out/diff.json")

    assert resolved == (tmp_path / "out" / "diff.json").resolve()
