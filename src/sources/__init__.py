"""Loading of declaration documents for dtsdiff."""

from sources.local import SourceLoadError, load_configured_sources, load_source
from sources.remote import SourceFetchError, fetch_remote_sources, fetch_source

__all__ = [
    "SourceFetchError",
    "SourceLoadError",
    "fetch_remote_sources",
    "fetch_source",
    "load_configured_sources",
    "load_source",
]
