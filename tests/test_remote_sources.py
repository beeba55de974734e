from __future__ import annotations

from pathlib import Path

import pytest
import requests

from config.loader import RemoteConfig
from sources.remote import SourceFetchError, fetch_remote_sources, fetch_source

TEMPLATE = "https://example.invalid/{tag}/index.d.ts"


class _FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code
        self.encoding: str | None = None

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class _FakeSession:
    def __init__(self, bodies: dict[str, _FakeResponse]) -> None:
        self.bodies = bodies
        self.requested: list[str] = []

    def get(self, url: str, timeout: float) -> _FakeResponse:
        self.requested.append(url)
        return self.bodies[url]


def test_fetch_source_downloads_and_caches(tmp_path: Path) -> None:
    url = TEMPLATE.format(tag="1.0.0")
    session = _FakeSession({url: _FakeResponse("declare const a: number;\n")})
    cache_dir = tmp_path / "cache"

    source = fetch_source(
        TEMPLATE,
        "1.0.0",
        document_name="index.d.ts",
        cache_dir=cache_dir,
        session=session,  # type: ignore[arg-type]
    )

    assert source.label == "1.0.0"
    assert source.document_name == "index.d.ts"
    assert session.requested == [url]
    assert (cache_dir / "1.0.0").read_text(encoding="utf-8") == source.content


def test_fetch_source_cache_hit_skips_network(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    (cache_dir / "2.0.0").write_text("declare const b: number;\n", encoding="utf-8")
    session = _FakeSession({})

    source = fetch_source(
        TEMPLATE,
        "2.0.0",
        document_name="index.d.ts",
        cache_dir=cache_dir,
        session=session,  # type: ignore[arg-type]
    )

    assert source.content == "declare const b: number;\n"
    assert session.requested == []


def test_fetch_source_http_error(tmp_path: Path) -> None:
    url = TEMPLATE.format(tag="9.9.9")
    session = _FakeSession({url: _FakeResponse("not found", status_code=404)})

    with pytest.raises(SourceFetchError, match="9.9.9"):
        fetch_source(
            TEMPLATE,
            "9.9.9",
            document_name="index.d.ts",
            session=session,  # type: ignore[arg-type]
        )
    assert not (tmp_path / "cache").exists()


def test_fetch_remote_sources_sorts_tags(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    bodies = {
        TEMPLATE.format(tag=tag): _FakeResponse(f"declare const v{i}: number;\n")
        for i, tag in enumerate(["1.10.0", "1.9.0"])
    }
    fake = _FakeSession(bodies)
    monkeypatch.setattr("sources.remote.requests.Session", lambda: _ContextSession(fake))

    remote = RemoteConfig(url_template=TEMPLATE, tags=["1.10.0", "1.9.0"])
    sources = fetch_remote_sources(tmp_path, remote)

    assert [s.label for s in sources] == ["1.9.0", "1.10.0"]


class _ContextSession:
    def __init__(self, inner: _FakeSession) -> None:
        self.inner = inner

    def __enter__(self) -> _FakeSession:
        return self.inner

    def __exit__(self, *exc: object) -> None:
        return None
