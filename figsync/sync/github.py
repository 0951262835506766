"""Expose sync results as GitHub Actions step outputs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from figsync.sync.models import SyncReport

logger = logging.getLogger(__name__)

_DELIMITER = "FIGSYNC_EOF"


def updated_frames_lines(report: SyncReport) -> list[str]:
    """One ``- <document name>: <node id>`` line per synced frame."""
    return [f"- {Path(f.document).name}: {f.node_id}" for f in report.frames]


def write_github_output(report: SyncReport, output_path: str | None = None) -> Path | None:
    """Append ``changes_detected`` and ``updated_frames`` to $GITHUB_OUTPUT.

    Returns the file written, or None when not running under Actions.
    """
    target = output_path or os.environ.get("GITHUB_OUTPUT")
    if not target:
        return None

    lines = updated_frames_lines(report)
    block = (
        f"changes_detected={'true' if report.changes_detected else 'false'}\n"
        f"updated_frames<<{_DELIMITER}\n"
        + "".join(f"{line}\n" for line in lines)
        + f"{_DELIMITER}\n"
    )
    path = Path(target)
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(block)
    logger.debug("wrote step outputs to %s", path)
    return path
