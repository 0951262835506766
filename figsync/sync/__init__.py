"""Sync orchestration and reporting."""

from figsync.sync.github import updated_frames_lines, write_github_output
from figsync.sync.models import SyncError, SyncReport, SyncedFrame, UnresolvedFrame
from figsync.sync.orchestrator import FigmaSync, screenshot_filename

__all__ = [
    "FigmaSync",
    "SyncError",
    "SyncReport",
    "SyncedFrame",
    "UnresolvedFrame",
    "screenshot_filename",
    "updated_frames_lines",
    "write_github_output",
]
