"""Fetching declaration documents over HTTP with an optional file cache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import requests

from models.diff import DiffSource
from utils import sort_version_tags

if TYPE_CHECKING:
    from config.loader import RemoteConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class SourceFetchError(Exception):
    """Raised when a remote document cannot be downloaded."""


def _cache_path(cache_dir: Path, tag: str) -> Path:
    # Tags are used verbatim as file names; keep them inside the cache dir.
    safe = tag.replace("/", "_").replace("\\", "_")
    return cache_dir / safe


def _read_cache(cache_dir: Path | None, tag: str) -> str | None:
    if cache_dir is None:
        return None
    path = _cache_path(cache_dir, tag)
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def _write_cache(cache_dir: Path | None, tag: str, content: str) -> None:
    if cache_dir is None:
        return
    cache_dir.mkdir(parents=True, exist_ok=True)
    _cache_path(cache_dir, tag).write_text(content, encoding="utf-8")


def fetch_source(
    url_template: str,
    tag: str,
    *,
    document_name: str,
    cache_dir: Path | None = None,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> DiffSource:
    """Fetch one version of a remote declaration file.

    Args:
        url_template: URL containing a ``{tag}`` placeholder
        tag: Version tag substituted into the URL and used as label
        document_name: Name reported for the document
        cache_dir: Optional directory; a cached body skips the request
        session: Optional requests session to reuse connections
        timeout: Request timeout in seconds

    Raises:
        SourceFetchError: On connection failures or non-2xx responses.
    """
    cached = _read_cache(cache_dir, tag)
    if cached is not None:
        logger.debug("loaded tag %s from cache", tag)
        return DiffSource(tag=tag, document_name=document_name, content=cached)

    url = url_template.format(tag=tag)
    http = session or requests
    logger.debug("downloading tag %s from %s", tag, url)
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        msg = f"Failed to fetch tag '{tag}' from {url}: {exc}"
        raise SourceFetchError(msg) from exc

    response.encoding = "utf-8"
    content = response.text
    _write_cache(cache_dir, tag, content)
    return DiffSource(tag=tag, document_name=document_name, content=content)


def fetch_remote_sources(root: Path, remote: RemoteConfig) -> list[DiffSource]:
    """Fetch every tag of a remote config section, oldest first."""
    tags = sort_version_tags(remote.tags) if remote.sort_tags else list(remote.tags)
    cache_dir = (Path(root) / remote.cache_dir) if remote.cache_dir else None

    with requests.Session() as session:
        return [
            fetch_source(
                remote.url_template,
                tag,
                document_name=remote.document_name,
                cache_dir=cache_dir,
                session=session,
            )
            for tag in tags
        ]
