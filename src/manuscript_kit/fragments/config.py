# src/manuscript_kit/fragments/config.py

from dataclasses import dataclass
from typing import Literal

Backend = Literal["filesystem", "memory"]


@dataclass(frozen=True)
class FragmentStoreConfig:
    """Configuration for fragment stores.

    Immutable. ``root`` is required for the filesystem backend and ignored by
    the in-memory one.
    """

    backend: Backend = "filesystem"
    root: str | None = None
    encoding: str = "utf-8"
    max_retries: int = 3
