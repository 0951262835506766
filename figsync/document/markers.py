"""Comment markers that delimit auto-generated regions in a document."""

import re

FRAME_TAG = "figma-frame:"
SCREENSHOT_MARKER = "<!-- figma-screenshot -->"
SPECS_START = "<!-- figma-specs-start -->"
SPECS_END = "<!-- figma-specs-end -->"
SPECS_HEADING = "## Figma Specifications"

# <!-- figma-frame: FILE_ID/NODE_ID -->
FRAME_COMMENT_RE = re.compile(r"<!--\s*figma-frame:\s*([^/\s]+)/(\S+)\s*-->")


def frame_comment_pattern(file_id: str, node_id: str) -> re.Pattern[str]:
    """Pattern for the comment of one specific frame, ids matched verbatim."""
    return re.compile(
        rf"<!--\s*figma-frame:\s*{re.escape(file_id)}/{re.escape(node_id)}\s*-->"
    )


def format_frame_comment(file_id: str, node_id: str) -> str:
    return f"<!-- {FRAME_TAG} {file_id}/{node_id} -->"
