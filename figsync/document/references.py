"""Find Figma frame references embedded in document text."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from figsync.document.markers import FRAME_COMMENT_RE


class FrameReference(BaseModel):
    """One ``<!-- figma-frame: FILE_ID/NODE_ID -->`` comment."""

    model_config = ConfigDict(frozen=True)

    file_id: str
    node_id: str

    def __str__(self) -> str:
        return f"{self.file_id}/{self.node_id}"


def parse_references(text: str) -> list[FrameReference]:
    """Return every frame reference in ``text``, in document order.

    Duplicates are kept. Never raises; text without references gives [].
    """
    return [
        FrameReference(file_id=m.group(1), node_id=m.group(2))
        for m in FRAME_COMMENT_RE.finditer(text)
    ]


def group_by_file(refs: list[FrameReference]) -> dict[str, list[str]]:
    """Group node ids by file id so each Figma file is fetched once.

    File ids and node ids keep first-seen order; repeated node ids collapse.
    """
    grouped: dict[str, dict[str, None]] = {}
    for ref in refs:
        grouped.setdefault(ref.file_id, {})[ref.node_id] = None
    return {file_id: list(node_ids) for file_id, node_ids in grouped.items()}
