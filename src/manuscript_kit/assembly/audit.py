# src/manuscript_kit/assembly/audit.py

import logging
from dataclasses import dataclass, field

from manuscript_kit.errors import EntryPosition
from manuscript_kit.fragments.base import FragmentStore
from manuscript_kit.manifest.models import Manifest
from manuscript_kit.manifest.traversal import find_duplicates, iter_positions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditReport:
    """Manifest health against a store, computed without reading content.

    Orphans (stored fragments no entry mentions) are informational only.
    """

    missing: tuple[EntryPosition, ...] = ()
    disabled: tuple[EntryPosition, ...] = ()
    duplicates: dict[str, list[EntryPosition]] = field(default_factory=dict)
    orphans: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing


def audit_manifest(manifest: Manifest, store: FragmentStore) -> AuditReport:
    missing: list[EntryPosition] = []
    disabled: list[EntryPosition] = []
    referenced: set[str] = set()

    for position in iter_positions(manifest):
        referenced.add(position.path)
        if position.index is None:
            disabled.append(position)
        elif position.path not in store:
            missing.append(position)

    orphans = tuple(p for p in store.paths() if p not in referenced)
    report = AuditReport(
        missing=tuple(missing),
        disabled=tuple(disabled),
        duplicates=find_duplicates(manifest),
        orphans=orphans,
    )
    logger.info(
        "Audit: %d missing, %d disabled, %d duplicated, %d orphaned",
        len(report.missing),
        len(report.disabled),
        len(report.duplicates),
        len(report.orphans),
    )
    return report
