"""Shared test fixtures for figsync."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from figsync.config.models import FigsyncConfig
from figsync.figma.client import FigmaClient
from figsync.figma.models import parse_node


@pytest.fixture
def button_frame_raw():
    """Raw Figma JSON for a button frame with a label."""
    return {
        "id": "1:2",
        "name": "Button / Primary",
        "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 320.0, "height": 48.0},
        "fills": [
            {"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0.5, "a": 1}},
            {"type": "GRADIENT_LINEAR", "gradientStops": []},
        ],
        "strokes": [
            {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0, "a": 1}, "opacity": 0.5},
        ],
        "children": [
            {
                "id": "1:3",
                "name": "Label",
                "type": "TEXT",
                "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1}}],
                "style": {
                    "fontFamily": "Inter",
                    "fontSize": 16,
                    "fontWeight": 600,
                    "lineHeightPx": 24,
                    "letterSpacing": 0,
                },
            }
        ],
    }


@pytest.fixture
def button_frame(button_frame_raw):
    return parse_node(button_frame_raw)


@pytest.fixture
def sample_config():
    return FigsyncConfig()


@pytest.fixture
def mock_figma_client(button_frame):
    """A FigmaClient stand-in that resolves every requested node to the button frame."""
    client = MagicMock(spec=FigmaClient)

    async def _fetch_nodes(file_id, node_ids):
        return {node_id: button_frame for node_id in node_ids}

    async def _download(url, dest):
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(b"\x89PNG fake")
        return dest

    client.fetch_nodes = AsyncMock(side_effect=_fetch_nodes)
    client.fetch_image_url = AsyncMock(return_value="https://cdn.example.com/img.png")
    client.download_image = AsyncMock(side_effect=_download)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def docs_dir(tmp_path):
    """A docs tree with one referencing .mdx file and one plain file."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "button.mdx").write_text(
        "# Button\n\n<!-- figma-frame: FILE123/1:2 -->\n\nSome prose.\n",
        encoding="utf-8",
    )
    (docs / "plain.mdx").write_text("# Nothing to see\n", encoding="utf-8")
    return docs
