# src/manuscript_kit/fragments/memory.py

import logging
from collections.abc import Iterable, Mapping
from time import monotonic

from manuscript_kit.errors import FragmentNotFoundError
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Fragment, FragmentStore

logger = logging.getLogger(__name__)


class InMemoryFragmentStore(FragmentStore):
    """Dict-backed store.

    The mapping is copied on construction, so later changes to the caller's
    dict do not leak into an assembly run.
    """

    def __init__(
        self,
        fragments: Mapping[str, str] | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._fragments: dict[str, str] = dict(fragments or {})
        self.metrics_hook = metrics_hook
        logger.debug("Initialized InMemoryFragmentStore with %d fragments", len(self._fragments))

    @classmethod
    def from_fragments(
        cls,
        fragments: Iterable[Fragment],
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "InMemoryFragmentStore":
        mapping: dict[str, str] = {}
        for fragment in fragments:
            if fragment.path in mapping:
                raise ValueError(f"Fragment '{fragment.path}' given twice")
            mapping[fragment.path] = fragment.content
        return cls(mapping, metrics_hook=metrics_hook)

    def get(self, path: str) -> Fragment:
        start = monotonic()
        try:
            content = self._fragments[path]
        except KeyError:
            self.metrics_hook.increment(
                names.FRAGMENT_ERRORS_TOTAL, labels={"backend": "memory"}
            )
            logger.error("Fragment not found: %s", path)
            raise FragmentNotFoundError(path) from None

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.FRAGMENT_READ_DURATION, elapsed_ms, labels={"backend": "memory"}
        )
        self.metrics_hook.increment(
            names.FRAGMENT_READS_TOTAL, labels={"backend": "memory"}
        )
        return Fragment(path=path, content=content)

    def resolve(self, path: str) -> str:
        return self.get(path).content

    def paths(self) -> list[str]:
        return sorted(self._fragments)

    def __contains__(self, path: object) -> bool:
        return path in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)
