# src/manuscript_kit/assembly/config.py

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["allow", "warn", "error"]


class AssemblyConfig(BaseModel):
    """How an assembled manuscript is laid out.

    ``duplicates`` decides what happens when one path is included by two
    enabled entries: ``allow`` re-includes silently, ``warn`` re-includes and
    logs, ``error`` fails the run before any fragment is read.
    """

    duplicates: DuplicatePolicy = "warn"
    fragment_separator: str = "\n\n"
    section_separator: str = "\n\n"
    section_markers: bool = True

    model_config = ConfigDict(extra="forbid")


def load_assembly_config(path: str | Path) -> AssemblyConfig:
    logger.info("Loading assembly config from %s", path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return AssemblyConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Assembly config {path} must be a mapping")
    return AssemblyConfig(**data)
