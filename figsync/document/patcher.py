"""Insert or refresh the screenshot marker and specs block of a document.

``patch_document`` is a pure function of its inputs; reading and writing
files is the caller's job. Applying the same patch twice gives the same
text as applying it once.
"""

from __future__ import annotations

from figsync.document.markers import (
    SCREENSHOT_MARKER,
    SPECS_END,
    SPECS_HEADING,
    SPECS_START,
    frame_comment_pattern,
)
from figsync.document.references import FrameReference


class MalformedDocumentError(ValueError):
    """A specs start marker has no matching end marker after it."""

    def __init__(self, marker: str, position: int) -> None:
        self.marker = marker
        self.position = position
        super().__init__(
            f"{marker} at offset {position} has no matching {SPECS_END}"
        )


def find_specs_block(text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first specs block, end exclusive.

    Returns None when the document has no start marker. Raises
    MalformedDocumentError when the start marker is not closed.
    """
    start = text.find(SPECS_START)
    if start == -1:
        return None
    end = text.find(SPECS_END, start + len(SPECS_START))
    if end == -1:
        raise MalformedDocumentError(SPECS_START, start)
    return start, end + len(SPECS_END)


def patch_document(
    text: str,
    ref: FrameReference,
    image_path: str,
    spec_markdown: str,
    *,
    embed_image: bool = False,
) -> str:
    """Return ``text`` with the screenshot marker and specs block for ``ref``.

    The screenshot marker is inserted after the first comment for ``ref``
    unless the document already has one anywhere. The specs block replaces
    the first existing block, or is appended under a heading.
    """
    # Validate before touching anything
    block = find_specs_block(text)

    if SCREENSHOT_MARKER not in text:
        insertion = "\n" + SCREENSHOT_MARKER
        if embed_image:
            insertion += f"\n![Figma frame {ref.node_id}]({image_path})"
        match = frame_comment_pattern(ref.file_id, ref.node_id).search(text)
        if match is not None:
            text = text[: match.end()] + insertion + text[match.end():]
            block = find_specs_block(text)

    new_block = f"{SPECS_START}{spec_markdown}\n{SPECS_END}"
    if block is None:
        return f"{text}\n\n{SPECS_HEADING}\n{new_block}"
    return text[: block[0]] + new_block + text[block[1]:]
