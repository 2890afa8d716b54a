# Assembly
from .assembly import (
    AssembledDocument,
    AssembledSection,
    Assembler,
    AssemblyConfig,
    AuditReport,
    ResolvedFragment,
    assemble_manuscript,
    audit_manifest,
    load_assembly_config,
)

# Errors
from .errors import (
    DuplicatePathError,
    EntryPosition,
    FragmentNotFoundError,
    FragmentReadError,
    ManifestFormatError,
    ManuscriptError,
)

# Fragments
from .fragments import (
    FileSystemFragmentStore,
    Fragment,
    FragmentStore,
    FragmentStoreConfig,
    InMemoryFragmentStore,
    create_fragment_store,
)

# Manifest
from .manifest import (
    Entry,
    Manifest,
    Section,
    SectionName,
    flatten,
    flatten_section,
    load_manifest,
    parse_manifest,
)

# Observability
from .observability import InMemoryMetricsHook, MetricsHook, NoOpMetricsHook

__all__ = [
    # Assembly
    "AssembledDocument",
    "AssembledSection",
    "Assembler",
    "AssemblyConfig",
    "AuditReport",
    "ResolvedFragment",
    "assemble_manuscript",
    "audit_manifest",
    "load_assembly_config",
    # Errors
    "DuplicatePathError",
    "EntryPosition",
    "FragmentNotFoundError",
    "FragmentReadError",
    "ManifestFormatError",
    "ManuscriptError",
    # Fragments
    "FileSystemFragmentStore",
    "Fragment",
    "FragmentStore",
    "FragmentStoreConfig",
    "InMemoryFragmentStore",
    "create_fragment_store",
    # Manifest
    "Entry",
    "Manifest",
    "Section",
    "SectionName",
    "flatten",
    "flatten_section",
    "load_manifest",
    "parse_manifest",
    # Observability
    "InMemoryMetricsHook",
    "MetricsHook",
    "NoOpMetricsHook",
]
