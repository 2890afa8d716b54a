# src/manuscript_kit/fragments/base.py

from dataclasses import dataclass
from typing import Protocol

from manuscript_kit.observability.base import MetricsHook


@dataclass(frozen=True)
class Fragment:
    path: str
    content: str


class FragmentStore(Protocol):
    """Addressable mapping from path string to fragment text.

    Lookups are exact-string and case-sensitive. Two fragments whose paths
    share a basename (``1.ComposingData/recipes/flip.md`` and
    ``ComposingData/recipes/flip.md``) are unrelated entries.
    """

    metrics_hook: MetricsHook

    def get(self, path: str) -> Fragment:
        """Return the fragment stored at ``path``.

        Raises:
            FragmentNotFoundError: no fragment at exactly this path.
        """
        ...

    def resolve(self, path: str) -> str: ...

    def paths(self) -> list[str]:
        """All stored paths, sorted."""
        ...

    def __contains__(self, path: object) -> bool: ...
