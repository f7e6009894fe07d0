"""
Definition document loading.

Definitions are TOML, YAML or JSON documents with a single top-level table
naming what they define:

    [font]
    height = 8
    glyphs = [{ index = "a", source = "glyphs/a" }]

The parser is picked from the file suffix.
"""
from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from tiasset.core.errors import DefinitionError

_log = logging.getLogger("tiasset.definitions")

M = TypeVar("M", bound=BaseModel)

DOCUMENT_SUFFIXES: tuple[str, ...] = (".toml", ".yaml", ".yml", ".json")


def _parse(suffix: str, raw_text: str) -> Any:
    if suffix == ".toml":
        return tomllib.loads(raw_text)
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(raw_text)
    return json.loads(raw_text)


def load_document(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix not in DOCUMENT_SUFFIXES:
        raise DefinitionError(
            f"Unsupported definition format {suffix or '<none>'!r} for {path}; "
            f"expected one of {', '.join(DOCUMENT_SUFFIXES)}"
        )

    try:
        raw_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DefinitionError(f"Failed to read definition at {path}: {exc}") from exc

    try:
        data = _parse(suffix, raw_text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise DefinitionError(f"Failed to parse definition at {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise DefinitionError(f"Definition at {path} must be a mapping, got {type(data).__name__}")
    return data


def load_definition(path: Path, key: str, model: Type[M]) -> M:
    """Load `path` and validate its top-level `key` table into `model`."""
    data = load_document(path)
    if key not in data:
        raise DefinitionError(f"Definition at {path} is missing the top-level [{key}] table")

    try:
        definition = model.model_validate(data[key])
    except ValidationError as exc:
        raise DefinitionError(f"Invalid {key} definition at {path}:\n{exc}") from exc

    _log.debug("Loaded %s definition from %s", key, path)
    return definition
