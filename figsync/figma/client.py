"""Figma REST API client.

Fetches node trees and rendered frame images, and downloads the rendered
images to disk. Authentication is a personal access token sent in the
``X-Figma-Token`` header.

Usage:
    async with FigmaClient(token) as client:
        nodes = await client.fetch_nodes("aBcD123", ["1:2", "1:3"])
        url = await client.fetch_image_url("aBcD123", "1:2", scale=2)
        await client.download_image(url, Path("figma-screenshots/aBcD123_1-2-@2x.png"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from figsync.figma.models import FrameNode, TextNode, parse_node

logger = logging.getLogger(__name__)

FIGMA_API_BASE = "https://api.figma.com"


class FigmaClientError(Exception):
    """Raised when a Figma API call or image download fails."""


class FigmaClient:
    """Async Figma REST API client backed by a shared httpx.AsyncClient."""

    def __init__(
        self,
        token: str,
        base_url: str = FIGMA_API_BASE,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise ValueError("Figma token required.")
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> FigmaClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"X-Figma-Token": self._token},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def _get(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET a Figma API path and return the decoded JSON body."""
        client = self._get_client()
        try:
            resp = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise FigmaClientError(f"Figma API timeout: {path}") from e
        except httpx.HTTPError as e:
            raise FigmaClientError(f"Figma API request failed: {path}: {e}") from e

        if resp.status_code == 403:
            raise FigmaClientError(
                "Figma API returned 403 Forbidden. Check that the token is valid "
                "and has file_content:read scope."
            )
        if resp.status_code == 404:
            raise FigmaClientError(f"Figma resource not found: {path}")
        if resp.status_code >= 400:
            raise FigmaClientError(
                f"Figma API error {resp.status_code}: {resp.text[:200]}"
            )

        try:
            return resp.json()
        except ValueError as e:
            raise FigmaClientError(f"Figma API returned invalid JSON: {path}") from e

    async def fetch_nodes(
        self, file_id: str, node_ids: list[str]
    ) -> dict[str, TextNode | FrameNode | FigmaClientError | None]:
        """Fetch node trees for ``node_ids`` in one request.

        GET /v1/files/:key/nodes?ids=...

        Every requested id appears in the result; ids the API did not return
        (or returned without a ``document``) map to None. A node whose JSON
        does not validate maps to a ``FigmaClientError`` instead of failing
        the whole batch.
        """
        data = await self._get(
            f"/v1/files/{file_id}/nodes", params={"ids": ",".join(node_ids)}
        )
        raw_nodes = data.get("nodes") or {}

        result: dict[str, TextNode | FrameNode | FigmaClientError | None] = {}
        for node_id in node_ids:
            entry = raw_nodes.get(node_id)
            document = entry.get("document") if isinstance(entry, dict) else None
            if not document:
                result[node_id] = None
                continue
            try:
                result[node_id] = parse_node(document)
            except ValidationError as e:
                logger.warning("node %s/%s failed validation", file_id, node_id)
                result[node_id] = FigmaClientError(
                    f"Unexpected node shape for {file_id}/{node_id}: {e}"
                )

        logger.debug(
            "fetch_nodes: file=%s requested=%d resolved=%d",
            file_id,
            len(node_ids),
            sum(1 for n in result.values() if isinstance(n, (TextNode, FrameNode))),
        )
        return result

    async def fetch_image_url(
        self, file_id: str, node_id: str, scale: int = 2, fmt: str = "png"
    ) -> str | None:
        """Ask Figma to render a node and return the temporary image URL.

        GET /v1/images/:key?ids=...&format=...&scale=...
        """
        data = await self._get(
            f"/v1/images/{file_id}",
            params={"ids": node_id, "format": fmt, "scale": str(scale)},
        )
        if data.get("err"):
            raise FigmaClientError(f"Figma image render error: {data['err']}")
        return (data.get("images") or {}).get(node_id)

    async def download_image(self, url: str, dest: Path) -> Path:
        """Stream an image URL to ``dest``. Parent directories are created.

        The body goes to a ``.part`` sibling first, so ``dest`` is either the
        complete new image or left as it was.
        """
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        partial = dest.with_name(dest.name + ".part")
        # Rendered images live on a CDN; the API token must not be sent there.
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as cdn:
                async with cdn.stream("GET", url) as resp:
                    if resp.status_code != 200:
                        raise FigmaClientError(
                            f"Failed to download image: {resp.status_code}"
                        )
                    with open(partial, "wb") as fh:
                        async for chunk in resp.aiter_bytes():
                            fh.write(chunk)
            partial.replace(dest)
        except httpx.HTTPError as e:
            raise FigmaClientError(f"Image download failed: {url}: {e}") from e
        finally:
            partial.unlink(missing_ok=True)

        logger.debug("saved image %s", dest)
        return dest
