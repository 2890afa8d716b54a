# src/manuscript_kit/manifest/traversal.py

"""Depth-first walks over a parsed manifest.

Nesting never reorders output: children are inlined right after their parent,
before the parent's next sibling.
"""

from collections.abc import Iterable, Iterator

from manuscript_kit.errors import EntryPosition

from .models import Entry, Manifest, Section


def iter_entries(section: Section) -> Iterator[Entry]:
    """Yield every entry of a section, enabled or not, in source order."""
    yield from _walk(section.entries)


def flatten_section(section: Section) -> list[Entry]:
    """Enabled entries of a section in output order."""
    return [entry for entry in iter_entries(section) if entry.enabled]


def flatten(manifest: Manifest) -> list[str]:
    """Enabled paths across all sections in output order."""
    return [
        entry.path
        for section in manifest.sections
        for entry in flatten_section(section)
    ]


def iter_positions(manifest: Manifest) -> Iterator[EntryPosition]:
    """Yield the position of every entry, disabled ones with ``index=None``."""
    for section in manifest.sections:
        index = 0
        for entry in iter_entries(section):
            if entry.enabled:
                yield EntryPosition(
                    section=section.name.value,
                    index=index,
                    line_number=entry.line_number,
                    path=entry.path,
                )
                index += 1
            else:
                yield EntryPosition(
                    section=section.name.value,
                    index=None,
                    line_number=entry.line_number,
                    path=entry.path,
                )


def find_duplicates(manifest: Manifest) -> dict[str, list[EntryPosition]]:
    """Enabled paths included more than once, keyed in first-seen order."""
    seen: dict[str, list[EntryPosition]] = {}
    for position in iter_positions(manifest):
        if position.index is None:
            continue
        seen.setdefault(position.path, []).append(position)
    return {path: positions for path, positions in seen.items() if len(positions) > 1}


def _walk(entries: Iterable[Entry]) -> Iterator[Entry]:
    for entry in entries:
        yield entry
        yield from _walk(entry.children)
