# src/manuscript_kit/fragments/filesystem.py

import logging
from collections.abc import Sequence
from pathlib import Path
from time import monotonic

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from manuscript_kit.errors import FragmentNotFoundError
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import Fragment, FragmentStore

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES = (".md", ".markdown")

# OSErrors that will not go away on a second read.
_PERMANENT_ERRORS = (
    FileNotFoundError,
    IsADirectoryError,
    NotADirectoryError,
    PermissionError,
)


class FileSystemFragmentStore(FragmentStore):
    """
    Fragments stored as files under a root directory.

    - Paths are forward-slash separated and relative to ``root``
    - Every path component must match a directory listing exactly, so
      case-insensitive filesystems do not alias ``Flip.md`` to ``flip.md``
    - Transient read errors are retried; missing files are not
    """

    def __init__(
        self,
        root: str | Path,
        encoding: str = "utf-8",
        max_retries: int = 3,
        backoff: float = 0.1,
        suffixes: Sequence[str] = DEFAULT_SUFFIXES,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self._root = Path(root)
        self._encoding = encoding
        self._max_retries = max_retries
        self._backoff = backoff
        self._suffixes = tuple(suffixes)
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized FileSystemFragmentStore with root=%s, encoding=%s, max_retries=%s",
            self._root,
            encoding,
            max_retries,
        )

    @property
    def root(self) -> Path:
        return self._root

    def get(self, path: str) -> Fragment:
        start = monotonic()
        try:
            content = self._read_with_retry(path)
        except (FragmentNotFoundError, OSError, UnicodeDecodeError):
            self.metrics_hook.increment(
                names.FRAGMENT_ERRORS_TOTAL, labels={"backend": "filesystem"}
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(
            names.FRAGMENT_READ_DURATION, elapsed_ms, labels={"backend": "filesystem"}
        )
        self.metrics_hook.increment(
            names.FRAGMENT_READS_TOTAL, labels={"backend": "filesystem"}
        )
        logger.debug("Read fragment %s (%d chars)", path, len(content))
        return Fragment(path=path, content=content)

    def resolve(self, path: str) -> str:
        return self.get(path).content

    def paths(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            p.relative_to(self._root).as_posix()
            for p in self._root.rglob("*")
            if p.is_file() and p.suffix in self._suffixes
        )

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            target = self._locate(path)
        except FragmentNotFoundError:
            return False
        return target.is_file()

    def _read_with_retry(self, path: str) -> str:
        for attempt in Retrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(
                multiplier=self._backoff, min=self._backoff, max=10 * self._backoff
            ),
            retry=(
                retry_if_exception_type(OSError)
                & retry_if_not_exception_type(_PERMANENT_ERRORS)
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return self._read(path)

    def _read(self, path: str) -> str:
        target = self._locate(path)
        try:
            return target.read_text(encoding=self._encoding)
        except (FileNotFoundError, IsADirectoryError):
            logger.error("Fragment not found: %s", path)
            raise FragmentNotFoundError(path) from None

    def _locate(self, path: str) -> Path:
        """Map ``path`` onto the root, checking each component's exact spelling."""
        parts = path.split("/")
        if any(part in ("", ".", "..") for part in parts):
            logger.error("Fragment path is not a plain relative path: %s", path)
            raise FragmentNotFoundError(path)

        current = self._root
        for part in parts:
            try:
                listing = {child.name for child in current.iterdir()}
            except (FileNotFoundError, NotADirectoryError):
                logger.error("Fragment not found: %s", path)
                raise FragmentNotFoundError(path) from None
            if part not in listing:
                logger.error("Fragment not found: %s", path)
                raise FragmentNotFoundError(path)
            current = current / part
        return current
