# src/manuscript_kit/assembly/assembler.py

import asyncio
import logging
from collections.abc import Callable
from time import monotonic

from manuscript_kit.errors import (
    DuplicatePathError,
    EntryPosition,
    FragmentNotFoundError,
    FragmentReadError,
    ManuscriptError,
)
from manuscript_kit.fragments.base import FragmentStore
from manuscript_kit.manifest.models import Manifest, SectionName
from manuscript_kit.manifest.traversal import find_duplicates, iter_positions
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .config import AssemblyConfig
from .document import AssembledDocument, AssembledSection, ResolvedFragment

logger = logging.getLogger(__name__)

Resolver = Callable[[str], str]


class Assembler:
    """Builds an AssembledDocument from a manifest and a resolve function.

    Design principles:
    - Deterministic: same manifest and store contents give identical text
    - Atomic: any failure raises, no partial document is ever returned
    - No retries: a missing fragment is an authoring error
    """

    def __init__(
        self,
        config: AssemblyConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or AssemblyConfig()
        self.metrics_hook = metrics_hook

    def assemble(self, manifest: Manifest, resolve: Resolver) -> AssembledDocument:
        """Resolve every enabled entry in manifest order and concatenate.

        Raises:
            FragmentNotFoundError: an enabled entry has no fragment; carries
                the entry's section, index and manifest line.
            FragmentReadError: a fragment exists but could not be read or
                decoded; carries the same position.
            DuplicatePathError: a path is included twice and the duplicate
                policy is ``error``.
        """
        start = monotonic()
        try:
            plan = self._plan(manifest)
            contents = [_resolve_at(resolve, position) for position in plan]
            document = self._build(plan, contents)
        except ManuscriptError:
            self.metrics_hook.increment(names.ASSEMBLY_ERRORS_TOTAL)
            raise
        self._record(document, start)
        return document

    async def assemble_async(
        self, manifest: Manifest, resolve: Resolver
    ) -> AssembledDocument:
        """Same output as ``assemble``, with fragment reads run concurrently.

        Reads happen in worker threads; results are put back in manifest
        order before concatenation.
        """
        start = monotonic()
        try:
            plan = self._plan(manifest)
            logger.debug("Reading %d fragments concurrently", len(plan))
            results = await asyncio.gather(
                *[asyncio.to_thread(_resolve_at, resolve, position) for position in plan],
                return_exceptions=True,
            )
            # Report the first failure in manifest order, not in completion order.
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            document = self._build(plan, list(results))
        except ManuscriptError:
            self.metrics_hook.increment(names.ASSEMBLY_ERRORS_TOTAL)
            raise
        self._record(document, start)
        return document

    def _plan(self, manifest: Manifest) -> list[EntryPosition]:
        duplicates = find_duplicates(manifest)
        for path, positions in duplicates.items():
            self.metrics_hook.increment(names.ASSEMBLY_DUPLICATES_TOTAL)
            if self.config.duplicates == "error":
                logger.error("Duplicate fragment path: %s", path)
                raise DuplicatePathError(path, positions)
            if self.config.duplicates == "warn":
                logger.warning(
                    "Fragment %s is included %d times: %s",
                    path,
                    len(positions),
                    ", ".join(str(p) for p in positions),
                )

        plan = [p for p in iter_positions(manifest) if p.index is not None]
        logger.info("Assembling %d fragments", len(plan))
        return plan

    def _build(
        self, plan: list[EntryPosition], contents: list[str]
    ) -> AssembledDocument:
        by_section: dict[SectionName, list[ResolvedFragment]] = {
            name: [] for name in SectionName
        }
        for position, content in zip(plan, contents, strict=True):
            name = SectionName(position.section)
            by_section[name].append(
                ResolvedFragment(
                    path=position.path,
                    content=content,
                    section=name,
                    index=position.index,
                    line_number=position.line_number,
                )
            )

        sections = tuple(
            AssembledSection(
                name=name,
                fragments=tuple(fragments),
                text=self.config.fragment_separator.join(
                    f.content.rstrip("\n") for f in fragments
                ),
            )
            for name, fragments in by_section.items()
        )
        return AssembledDocument(sections=sections, text=self._render(sections))

    def _render(self, sections: tuple[AssembledSection, ...]) -> str:
        blocks: list[str] = []
        for section in sections:
            if self.config.section_markers:
                marker = f"{{{section.name.value}}}"
                blocks.append(f"{marker}\n\n{section.text}" if section.text else marker)
            elif section.text:
                blocks.append(section.text)

        text = self.config.section_separator.join(blocks)
        return text.rstrip("\n") + "\n" if text else ""

    def _record(self, document: AssembledDocument, start: float) -> None:
        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.ASSEMBLY_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.ASSEMBLY_RUNS_TOTAL)
        self.metrics_hook.record_gauge(names.ASSEMBLY_FRAGMENTS, len(document.paths))
        self.metrics_hook.record_gauge(names.ASSEMBLY_OUTPUT_CHARS, len(document.text))
        logger.info(
            "Assembled %d fragments into %d characters",
            len(document.paths),
            len(document.text),
        )


def assemble_manuscript(
    manifest: Manifest,
    store: FragmentStore,
    config: AssemblyConfig | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> AssembledDocument:
    return Assembler(config, metrics_hook=metrics_hook).assemble(manifest, store.resolve)


def _resolve_at(resolve: Resolver, position: EntryPosition) -> str:
    try:
        return resolve(position.path)
    except FragmentNotFoundError as exc:
        raise exc.with_position(position) from exc
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read fragment %s: %s", position.path, exc)
        raise FragmentReadError(
            position.path,
            str(exc),
            section=position.section,
            index=position.index,
            line_number=position.line_number,
        ) from exc
