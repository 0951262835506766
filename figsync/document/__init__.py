"""Document handling: reference parsing, patching and discovery."""

from figsync.document.markers import (
    SCREENSHOT_MARKER,
    SPECS_END,
    SPECS_HEADING,
    SPECS_START,
)
from figsync.document.patcher import (
    MalformedDocumentError,
    find_specs_block,
    patch_document,
)
from figsync.document.references import FrameReference, group_by_file, parse_references
from figsync.document.scanner import list_documents

__all__ = [
    "FrameReference",
    "MalformedDocumentError",
    "SCREENSHOT_MARKER",
    "SPECS_END",
    "SPECS_HEADING",
    "SPECS_START",
    "find_specs_block",
    "group_by_file",
    "list_documents",
    "parse_references",
    "patch_document",
]
