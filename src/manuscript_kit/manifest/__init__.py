from .models import SECTION_ORDER, Entry, Manifest, Section, SectionName
from .parser import load_manifest, parse_manifest
from .traversal import (
    find_duplicates,
    flatten,
    flatten_section,
    iter_entries,
    iter_positions,
)

__all__ = [
    "SECTION_ORDER",
    "Entry",
    "Manifest",
    "Section",
    "SectionName",
    "find_duplicates",
    "flatten",
    "flatten_section",
    "iter_entries",
    "iter_positions",
    "load_manifest",
    "parse_manifest",
]
