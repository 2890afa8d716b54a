# src/manuscript_kit/fragments/factory.py

from collections.abc import Mapping

from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import FragmentStore
from .config import FragmentStoreConfig
from .filesystem import FileSystemFragmentStore
from .memory import InMemoryFragmentStore


def create_fragment_store(
    config: FragmentStoreConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
    fragments: Mapping[str, str] | None = None,
) -> FragmentStore:
    """Create a fragment store from config.

    Args:
        config: Store configuration specifying backend, root, etc.
        metrics_hook: Optional metrics hook for observability.
        fragments: Initial contents for the in-memory backend.

    Raises:
        ValueError: If the backend is unknown or a filesystem root is missing.

    Example:
        >>> config = FragmentStoreConfig(backend="filesystem", root="manuscript")
        >>> store = create_fragment_store(config)
        >>> store.resolve("markdown/0.Functions/title.md")
    """
    if config.backend == "filesystem":
        if not config.root:
            raise ValueError("Filesystem fragment store requires a root directory")
        return FileSystemFragmentStore(
            root=config.root,
            encoding=config.encoding,
            max_retries=config.max_retries,
            metrics_hook=metrics_hook,
        )

    if config.backend == "memory":
        return InMemoryFragmentStore(fragments, metrics_hook=metrics_hook)

    raise ValueError(f"Unknown fragment store backend: {config.backend}")
