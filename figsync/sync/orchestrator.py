"""FigmaSync: scans documents, fetches referenced frames, patches documents."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

import httpx

from figsync.config.models import FigsyncConfig
from figsync.document import (
    FrameReference,
    MalformedDocumentError,
    find_specs_block,
    group_by_file,
    list_documents,
    parse_references,
    patch_document,
)
from figsync.figma.client import FigmaClient, FigmaClientError
from figsync.figma.models import FrameNode, TextNode
from figsync.specs import extract_spec, render_spec
from figsync.sync.models import SyncError, SyncReport, SyncedFrame, UnresolvedFrame

logger = logging.getLogger(__name__)

# Failures that cost one frame (or one file group) but not the run
_FRAME_ERRORS = (FigmaClientError, httpx.HTTPError, OSError)


def _safe_part(value: str) -> str:
    # Node ids are digits joined by ":" and ";" ("I1:2;3:4"); keep them apart
    value = value.replace(":", "-").replace(";", "_")
    return re.sub(r"[^\w.\-]", "_", value).replace("..", "")


def screenshot_filename(file_id: str, node_id: str, scale: int, fmt: str) -> str:
    """Filesystem-safe screenshot name, e.g. ``FILE/1:2`` -> ``FILE_1-2-@2x.png``.

    The file id is part of the name so equal node ids from different Figma
    files never share an image.
    """
    parts = [p for p in (_safe_part(file_id), _safe_part(node_id)) if p]
    return f"{'_'.join(parts) or '_unnamed'}-@{scale}x.{fmt}"


class FigmaSync:
    """Runs one sync pass over a documentation tree.

    Documents are processed one at a time in sorted order, and the frames of
    a document in reference order, so output is reproducible. A failure on
    one frame is logged and recorded in the report; the run continues.
    """

    def __init__(self, client: FigmaClient, config: FigsyncConfig) -> None:
        self.client = client
        self.config = config

    # -- Public API ----------------------------------------------------------

    async def run(self, root: Path, *, dry_run: bool = False) -> SyncReport:
        """Sync every document under *root*."""
        start = time.monotonic()
        report = SyncReport()

        documents = list_documents(
            Path(root), self.config.scan.pattern, self.config.scan.exclude
        )
        logger.info("found %d documents to scan", len(documents))

        for path in documents:
            report.documents_scanned += 1
            await self.sync_document(path, report, dry_run=dry_run)

        report.duration = time.monotonic() - start
        return report

    async def sync_document(
        self, path: Path, report: SyncReport, *, dry_run: bool = False
    ) -> bool:
        """Sync all frames referenced by one document. Returns True if it changed."""
        try:
            original = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            report.errors.append(SyncError(file=str(path), error=str(exc)))
            logger.error("cannot read %s: %s", path, exc)
            return False

        refs = parse_references(original)
        if not refs:
            return False
        logger.info("processing %s (%d frame references)", path, len(refs))

        text = original
        try:
            # Reject a broken specs block before spending any API calls on it
            find_specs_block(original)
            for file_id, node_ids in group_by_file(refs).items():
                text = await self._sync_file_group(
                    path, text, file_id, node_ids, report, dry_run=dry_run
                )
        except MalformedDocumentError as exc:
            report.errors.append(SyncError(file=str(path), error=str(exc)))
            logger.error("skipping %s: %s", path, exc)
            return False

        if text == original:
            return False
        if dry_run:
            logger.info("dry-run: would update %s", path)
        else:
            try:
                path.write_text(text, encoding="utf-8")
            except OSError as exc:
                report.errors.append(SyncError(file=str(path), error=str(exc)))
                logger.error("cannot write %s: %s", path, exc)
                return False
            logger.info("updated %s", path)
        report.documents_updated += 1
        return True

    # -- Internals -----------------------------------------------------------

    async def _sync_file_group(
        self,
        path: Path,
        text: str,
        file_id: str,
        node_ids: list[str],
        report: SyncReport,
        *,
        dry_run: bool,
    ) -> str:
        try:
            nodes = await self.client.fetch_nodes(file_id, node_ids)
        except _FRAME_ERRORS as exc:
            report.errors.append(SyncError(file=str(path), error=str(exc), frame=file_id))
            logger.error("error fetching nodes of file %s: %s", file_id, exc)
            return text

        for node_id in node_ids:
            node = nodes.get(node_id)
            if node is None:
                report.unresolved.append(
                    UnresolvedFrame(document=str(path), file_id=file_id, node_id=node_id)
                )
                logger.warning("could not fetch node %s in file %s", node_id, file_id)
                continue

            ref = FrameReference(file_id=file_id, node_id=node_id)
            if isinstance(node, FigmaClientError):
                report.errors.append(SyncError(file=str(path), error=str(node), frame=str(ref)))
                logger.error("skipping frame %s: %s", ref, node)
                continue
            try:
                text, screenshot = await self._sync_frame(path, text, ref, node, dry_run=dry_run)
            except _FRAME_ERRORS as exc:
                report.errors.append(SyncError(file=str(path), error=str(exc), frame=str(ref)))
                logger.error("error syncing frame %s: %s", ref, exc)
                continue

            report.frames.append(
                SyncedFrame(
                    document=str(path),
                    file_id=file_id,
                    node_id=node_id,
                    screenshot=screenshot,
                )
            )
            logger.info("synced frame %s", node_id)
        return text

    async def _sync_frame(
        self,
        path: Path,
        text: str,
        ref: FrameReference,
        node: TextNode | FrameNode,
        *,
        dry_run: bool,
    ) -> tuple[str, str]:
        """Export the screenshot and patch *text*. Returns (new text, image path)."""
        export = self.config.export
        relative = Path(export.screenshot_dir) / screenshot_filename(
            ref.file_id, ref.node_id, export.scale, export.format
        )

        url = await self.client.fetch_image_url(
            ref.file_id, ref.node_id, scale=export.scale, fmt=export.format
        )
        if not url:
            raise FigmaClientError(f"Figma rendered no image for {ref}")
        if dry_run:
            logger.debug("dry-run: would save %s", path.parent / relative)
        else:
            await self.client.download_image(url, path.parent / relative)

        specs = self.config.specs
        spec = extract_spec(
            node,
            size=specs.extract_size,
            colors=specs.extract_colors,
            typography=specs.extract_typography,
            spacing=specs.extract_spacing,
        )
        if spec.is_empty:
            logger.debug("frame %s has no spec data", ref)

        new_text = patch_document(
            text,
            ref,
            relative.as_posix(),
            render_spec(spec),
            embed_image=export.embed_image_link,
        )
        return new_text, relative.as_posix()
