"""Diff session: validate sources, extract each version, fold pairs."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import TYPE_CHECKING, overload

from config.loader import ConfigError
from diff.pairwise import diff_pair
from diff.timeline import TimelineAggregator
from models.diff import DiffOptions, DiffResult, DiffSource
from parse.treesitter_declarations import extract_declarations
from parse.treesitter_document import parse_document

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from models.declarations import DeclarationNode, ExtractionDiagnostic

    DiffCallback = Callable[[DiffResult | None, BaseException | None], None]

logger = logging.getLogger(__name__)

MIN_SOURCES = 2


def validate_sources(sources: Sequence[DiffSource]) -> None:
    """Reject inputs that cannot form a single version pair."""
    if len(sources) < MIN_SOURCES:
        msg = (
            f"at least {MIN_SOURCES} sources are required to compute a diff, "
            f"got {len(sources)}"
        )
        raise ConfigError(msg)


class DiffSession:
    """Computes items and timelines across an ordered list of versions.

    A session holds only its options; every call to ``run`` or ``submit``
    builds its own intermediate state and returns a fresh result.
    """

    def __init__(self, options: DiffOptions | None = None) -> None:
        self.options = options or DiffOptions()

    def _compute(self, sources: Sequence[DiffSource]) -> DiffResult:
        validate_sources(sources)

        # Parse everything up front so a broken version fails the session
        # before any pair is diffed.
        documents = [parse_document(s.document_name, s.content) for s in sources]

        diagnostics: list[ExtractionDiagnostic] = []
        snapshots: list[list[DeclarationNode]] = []
        for source, document in zip(sources, documents):
            declarations = extract_declarations(document, diagnostics=diagnostics)
            logger.debug(
                "extracted %d declarations from %s", len(declarations), source.label
            )
            snapshots.append(declarations)

        aggregator = TimelineAggregator()
        if self.options.treat_first_version_as_baseline:
            aggregator.seed_baseline(sources[0].label, snapshots[0])

        for index in range(1, len(sources)):
            from_label = sources[index - 1].label
            to_label = sources[index].label
            pair = diff_pair(snapshots[index - 1], snapshots[index])
            logger.debug(
                "%s -> %s: %d added, %d removed, %d deprecated",
                from_label,
                to_label,
                len(pair.added),
                len(pair.removed),
                len(pair.newly_deprecated),
            )
            aggregator.fold(from_label, to_label, pair)

        return aggregator.build(diagnostics)

    @overload
    def run(
        self, sources: Sequence[DiffSource], *, callback: None = None
    ) -> DiffResult: ...

    @overload
    def run(
        self, sources: Sequence[DiffSource], *, callback: DiffCallback
    ) -> None: ...

    def run(
        self,
        sources: Sequence[DiffSource],
        *,
        callback: DiffCallback | None = None,
    ) -> DiffResult | None:
        """Run the session.

        Without ``callback`` the result is returned and errors propagate.
        With ``callback`` it is invoked exactly once, as ``callback(result,
        None)`` or ``callback(None, error)``, and ``None`` is returned.
        """
        if callback is None:
            return self._compute(sources)

        try:
            result = self._compute(sources)
        except Exception as exc:
            callback(None, exc)
            return None
        callback(result, None)
        return None

    def submit(self, sources: Sequence[DiffSource]) -> Future[DiffResult]:
        """Run the session and deliver the outcome through a ``Future``."""
        future: Future[DiffResult] = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(self._compute(sources))
        except Exception as exc:
            future.set_exception(exc)
        return future


def run_diff(
    sources: Sequence[DiffSource],
    options: DiffOptions | None = None,
    callback: DiffCallback | None = None,
) -> DiffResult | None:
    """Convenience wrapper around ``DiffSession(options).run``."""
    return DiffSession(options).run(sources, callback=callback)
