# src/manuscript_kit/assembly/document.py

from dataclasses import dataclass

from manuscript_kit.manifest.models import SectionName


@dataclass(frozen=True)
class ResolvedFragment:
    """Fragment content placed at its manifest position."""

    path: str
    content: str
    section: SectionName
    index: int
    line_number: int


@dataclass(frozen=True)
class AssembledSection:
    name: SectionName
    fragments: tuple[ResolvedFragment, ...]
    text: str

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.fragments]


@dataclass(frozen=True)
class AssembledDocument:
    """Final linear manuscript.

    Immutable. Re-assembling produces a new document; nothing is patched in
    place.
    """

    sections: tuple[AssembledSection, ...]
    text: str

    @property
    def paths(self) -> list[str]:
        return [path for section in self.sections for path in section.paths]

    def section(self, name: SectionName | str) -> AssembledSection:
        key = SectionName(name)
        for section in self.sections:
            if section.name is key:
                return section
        raise KeyError(f"Section '{key.value}' not found")
