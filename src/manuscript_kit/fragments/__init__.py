from .base import Fragment, FragmentStore
from .config import FragmentStoreConfig
from .factory import create_fragment_store
from .filesystem import FileSystemFragmentStore
from .memory import InMemoryFragmentStore

__all__ = [
    "FileSystemFragmentStore",
    "Fragment",
    "FragmentStore",
    "FragmentStoreConfig",
    "InMemoryFragmentStore",
    "create_fragment_store",
]
