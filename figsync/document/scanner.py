"""Locate documents that may carry Figma frame references."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _matches_any(path: Path, patterns: set[str]) -> bool:
    """Check whether any component of *path* matches one of *patterns*."""
    return any(part in patterns for part in path.parts)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts)


def list_documents(
    root: Path,
    pattern: str = "**/*.mdx",
    exclude: list[str] | None = None,
) -> list[Path]:
    """Return documents under *root* matching *pattern*, sorted.

    Paths with a hidden component or a component listed in *exclude*
    are skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Scan root is not a directory: {root}")

    ignore = set(exclude or [])
    documents: list[Path] = []
    for p in sorted(root.glob(pattern)):
        if not p.is_file():
            continue
        rel = p.relative_to(root)
        if _is_hidden(rel) or _matches_any(rel, ignore):
            continue
        documents.append(p)

    logger.debug("found %d documents under %s", len(documents), root)
    return documents
