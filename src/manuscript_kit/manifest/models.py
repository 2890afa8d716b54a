# src/manuscript_kit/manifest/models.py

from dataclasses import dataclass, field
from enum import Enum


class SectionName(str, Enum):
    """Top-level manuscript section.

    Declaration order is the output order.
    """

    FRONTMATTER = "frontmatter"
    MAINMATTER = "mainmatter"
    BACKMATTER = "backmatter"


SECTION_ORDER: tuple[SectionName, ...] = tuple(SectionName)


@dataclass(frozen=True)
class Entry:
    """One manifest line referencing a fragment path.

    A disabled entry (``#``-prefixed line) is kept for auditing but never
    contributes content. Disabling applies to the line only; its children
    keep their own flag.
    """

    path: str
    enabled: bool
    line_number: int
    depth: int = 0
    children: tuple["Entry", ...] = ()


@dataclass(frozen=True)
class Section:
    name: SectionName
    entries: tuple[Entry, ...] = ()


@dataclass(frozen=True)
class Manifest:
    """Ordered book structure.

    Always holds the three sections in canonical order, empty when the
    manifest text does not declare them.
    """

    sections: tuple[Section, ...] = field(
        default_factory=lambda: tuple(Section(name=n) for n in SECTION_ORDER)
    )

    def __post_init__(self) -> None:
        names = tuple(s.name for s in self.sections)
        if names != SECTION_ORDER:
            raise ValueError(
                f"Manifest sections must be {[n.value for n in SECTION_ORDER]}, "
                f"got {[n.value for n in names]}"
            )

    def section(self, name: SectionName | str) -> Section:
        key = SectionName(name)
        for section in self.sections:
            if section.name is key:
                return section
        raise KeyError(f"Section '{key.value}' not found")
