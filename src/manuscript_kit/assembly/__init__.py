from .assembler import Assembler, assemble_manuscript
from .audit import AuditReport, audit_manifest
from .config import AssemblyConfig, load_assembly_config
from .document import AssembledDocument, AssembledSection, ResolvedFragment

__all__ = [
    "AssembledDocument",
    "AssembledSection",
    "Assembler",
    "AssemblyConfig",
    "AuditReport",
    "ResolvedFragment",
    "assemble_manuscript",
    "audit_manifest",
    "load_assembly_config",
]
