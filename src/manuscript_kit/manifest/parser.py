# src/manuscript_kit/manifest/parser.py

import logging
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

from manuscript_kit.errors import ManifestFormatError
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .models import SECTION_ORDER, Entry, Manifest, Section, SectionName

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"
TAB_SIZE = 4


@dataclass(frozen=True)
class _Line:
    depth: int
    path: str
    enabled: bool
    line_number: int


class _BlockState:
    """Indentation stack for one section block."""

    def __init__(self, name: SectionName) -> None:
        self.name = name
        self.indents: list[int] = []
        self.lines: list[_Line] = []

    @property
    def base(self) -> int | None:
        return self.indents[0] if self.indents else None

    def depth_for(self, indent: int, line_number: int, raw: str) -> int:
        if not self.indents:
            self.indents.append(indent)
            return 0

        if indent > self.indents[-1]:
            self.indents.append(indent)
            return len(self.indents) - 1

        if indent < self.indents[0]:
            raise ManifestFormatError(
                f"indentation below the base level of section '{self.name.value}'",
                line_number=line_number,
                line=raw,
            )

        while self.indents[-1] > indent:
            self.indents.pop()
        if self.indents[-1] != indent:
            raise ManifestFormatError(
                "inconsistent indentation", line_number=line_number, line=raw
            )
        return len(self.indents) - 1


def parse_manifest(
    text: str,
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Manifest:
    """Parse manifest text into a Manifest.

    Every entry is kept, enabled or disabled, in source order. Sections may
    be declared in any order; the result always lists them canonically.

    Raises:
        ManifestFormatError: unknown or repeated section header, entry
            outside a section, or inconsistent indentation.
    """
    start = monotonic()
    blocks: dict[SectionName, _BlockState] = {}
    current: _BlockState | None = None

    for line_number, raw in enumerate(text.splitlines(), start=1):
        expanded = raw.expandtabs(TAB_SIZE)
        stripped = expanded.strip()
        if not stripped:
            continue
        indent = len(expanded) - len(expanded.lstrip())

        if stripped.startswith(COMMENT_MARKER):
            path = stripped[len(COMMENT_MARKER) :].strip()
            if current is None or not path:
                logger.debug("Skipping comment on line %d", line_number)
                continue
            # Column-0 comments inside a block sit at the block's base level.
            if indent == 0 and current.base is not None:
                indent = current.base
            if indent == 0:
                current.lines.append(_Line(0, path, False, line_number))
                continue
            depth = current.depth_for(indent, line_number, raw)
            current.lines.append(_Line(depth, path, False, line_number))
            continue

        if indent == 0:
            if not stripped.endswith(":"):
                if current is None:
                    message = "entry before any section header"
                else:
                    message = f"entry not indented under section '{current.name.value}'"
                raise ManifestFormatError(message, line_number=line_number, line=raw)
            current = _open_block(stripped[:-1].strip(), blocks, line_number, raw)
            continue

        if current is None:
            raise ManifestFormatError(
                "entry before any section header", line_number=line_number, line=raw
            )
        depth = current.depth_for(indent, line_number, raw)
        current.lines.append(_Line(depth, stripped, True, line_number))

    sections = tuple(
        Section(name=name, entries=_build_tree(blocks[name].lines))
        if name in blocks
        else Section(name=name)
        for name in SECTION_ORDER
    )
    manifest = Manifest(sections=sections)

    total = sum(len(b.lines) for b in blocks.values())
    disabled = sum(1 for b in blocks.values() for ln in b.lines if not ln.enabled)
    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.MANIFEST_PARSE_DURATION, elapsed_ms)
    metrics_hook.record_gauge(names.MANIFEST_ENTRIES, total)
    metrics_hook.record_gauge(names.MANIFEST_DISABLED_ENTRIES, disabled)
    logger.debug(
        "Parsed manifest: %d sections declared, %d entries (%d disabled)",
        len(blocks),
        total,
        disabled,
    )
    return manifest


def load_manifest(
    path: str | Path,
    *,
    encoding: str = "utf-8",
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Manifest:
    logger.info("Loading manifest from %s", path)
    text = Path(path).read_text(encoding=encoding)
    return parse_manifest(text, metrics_hook=metrics_hook)


def _open_block(
    name: str,
    blocks: dict[SectionName, _BlockState],
    line_number: int,
    raw: str,
) -> _BlockState:
    try:
        section = SectionName(name)
    except ValueError:
        raise ManifestFormatError(
            f"unknown section '{name}'", line_number=line_number, line=raw
        ) from None
    if section in blocks:
        raise ManifestFormatError(
            f"section '{name}' declared twice", line_number=line_number, line=raw
        )
    block = _BlockState(section)
    blocks[section] = block
    return block


def _build_tree(lines: list[_Line]) -> tuple[Entry, ...]:
    entries, _ = _build_level(lines, 0, 0)
    return entries


def _build_level(lines: list[_Line], pos: int, depth: int) -> tuple[tuple[Entry, ...], int]:
    entries: list[Entry] = []
    while pos < len(lines) and lines[pos].depth == depth:
        line = lines[pos]
        children, pos = _build_level(lines, pos + 1, depth + 1)
        entries.append(
            Entry(
                path=line.path,
                enabled=line.enabled,
                line_number=line.line_number,
                depth=depth,
                children=children,
            )
        )
    return tuple(entries), pos
