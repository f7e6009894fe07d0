from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from tiasset.core.errors import DefinitionError

from .loader import DOCUMENT_SUFFIXES

PathLike = Union[str, Path]


def relative_parent_suffix(path: PathLike, relative: PathLike, suffix: str) -> Path:
    """Makes `relative` relative to the parent of `path` and appends `suffix`."""
    joined = os.path.join(os.fspath(path), "..", os.fspath(relative)) + suffix
    return Path(os.path.normpath(joined))


def resolve_reference(path: Path, relative: PathLike) -> Path:
    """
    Finds the definition `relative` (written without an extension) refers to.

    The referencing document's own suffix is tried first, then every other
    supported document suffix.
    """
    own = path.suffix.lower()
    candidates = [own] + [s for s in DOCUMENT_SUFFIXES if s != own]
    tried = []
    for suffix in candidates:
        candidate = relative_parent_suffix(path, relative, suffix)
        if candidate.is_file():
            return candidate
        tried.append(str(candidate))
    raise DefinitionError(f"Referenced definition {os.fspath(relative)!r} from {path} not found; tried: {', '.join(tried)}")


def canonical_definition_path(path: PathLike) -> Path:
    try:
        return Path(path).resolve(strict=True)
    except OSError as exc:
        raise DefinitionError(f"Failed to get canonical definition path {os.fspath(path)!r}: {exc}") from exc
