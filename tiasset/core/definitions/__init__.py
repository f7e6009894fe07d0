from .loader import DOCUMENT_SUFFIXES, load_definition, load_document
from .paths import canonical_definition_path, relative_parent_suffix, resolve_reference

__all__ = [
    "DOCUMENT_SUFFIXES",
    "canonical_definition_path",
    "load_definition",
    "load_document",
    "relative_parent_suffix",
    "resolve_reference",
]
