"""Manifest loader -- reads ``.hosting/config.yaml`` into ``Manifest``.

Reads YAML, validates against the pydantic models and converts every
failure into ``ConfigurationError``.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from hostsync.provisioner.errors import ConfigurationError
from hostsync.provisioner.models.manifest import Manifest


def parse_manifest(text: str, source: str = "<manifest>") -> Manifest:
    """Parse manifest YAML.  Raises ``ConfigurationError`` on invalid content."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {source}: {exc}"
        raise ConfigurationError(msg) from None

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        msg = f"{source} must contain a mapping at the top level"
        raise ConfigurationError(msg)

    try:
        return Manifest.model_validate(raw)
    except ValidationError as exc:
        msg = f"Invalid manifest {source}:\n{exc}"
        raise ConfigurationError(msg) from None


def load_manifest(path: str | Path) -> Manifest:
    """Load and validate the manifest file at ``path``."""
    path = Path(path)
    if not path.is_file():
        msg = f"Manifest not found: {path}"
        raise ConfigurationError(msg)

    logger.debug("Loading manifest from {}", path)
    return parse_manifest(path.read_text(encoding="utf-8"), str(path))
