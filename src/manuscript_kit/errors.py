# src/manuscript_kit/errors.py

"""Error taxonomy for manuscript assembly.

Every error aborts the current assembly run. None of them is retried: they
describe authoring mistakes in the manifest or the fragment tree.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class EntryPosition:
    """Where an entry sits in a manifest.

    ``index`` counts enabled entries of the section in flattened order; it is
    ``None`` for disabled entries.
    """

    section: str
    index: int | None
    line_number: int
    path: str

    def __str__(self) -> str:
        where = f"{self.section}[{self.index}]" if self.index is not None else self.section
        return f"{where} (line {self.line_number})"


class ManuscriptError(Exception):
    """Base class for all manuscript-kit errors."""


class ManifestFormatError(ManuscriptError):
    """The manifest text violates the header/indentation grammar."""

    def __init__(self, message: str, *, line_number: int, line: str) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        super().__init__(f"line {line_number}: {message}: {line.strip()!r}")


class FragmentNotFoundError(ManuscriptError, LookupError):
    """An enabled entry references a path with no fragment in the store."""

    def __init__(
        self,
        path: str,
        *,
        section: str | None = None,
        index: int | None = None,
        line_number: int | None = None,
    ) -> None:
        self.path = path
        self.section = section
        self.index = index
        self.line_number = line_number
        super().__init__(self._format())

    def _format(self) -> str:
        msg = f"Fragment '{self.path}' not found"
        if self.section is not None:
            msg += f" (referenced from {self.section}[{self.index}]"
            if self.line_number is not None:
                msg += f", manifest line {self.line_number}"
            msg += ")"
        return msg

    def with_position(self, position: EntryPosition) -> "FragmentNotFoundError":
        return FragmentNotFoundError(
            self.path,
            section=position.section,
            index=position.index,
            line_number=position.line_number,
        )


class DuplicatePathError(ManuscriptError):
    """The same path is included by more than one enabled entry."""

    def __init__(self, path: str, positions: Sequence[EntryPosition]) -> None:
        self.path = path
        self.positions = tuple(positions)
        where = ", ".join(str(p) for p in self.positions)
        super().__init__(
            f"Fragment '{path}' is included {len(self.positions)} times: {where}"
        )


class FragmentReadError(ManuscriptError):
    """A fragment exists but could not be read or decoded."""

    def __init__(
        self,
        path: str,
        reason: str,
        *,
        section: str | None = None,
        index: int | None = None,
        line_number: int | None = None,
    ) -> None:
        self.path = path
        self.reason = reason
        self.section = section
        self.index = index
        self.line_number = line_number
        msg = f"Fragment '{path}' could not be read: {reason}"
        if section is not None:
            msg += f" (referenced from {section}[{index}], manifest line {line_number})"
        super().__init__(msg)
