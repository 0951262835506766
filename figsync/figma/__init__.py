"""Figma API access for figsync."""

import os

from figsync.config.models import FigmaConfig
from figsync.figma.client import FigmaClient, FigmaClientError
from figsync.figma.models import (
    BoundingBox,
    DesignNode,
    FrameNode,
    Paint,
    RGBColor,
    TextNode,
    TypeStyle,
    parse_node,
)


def create_client(config: FigmaConfig) -> FigmaClient:
    """Create a Figma client from config.

    Resolves the token from the environment variable named in config.token_env.
    """
    token = os.environ.get(config.token_env, "")
    if not token:
        raise ValueError(
            f"Figma token not found. Set the {config.token_env} environment variable."
        )
    return FigmaClient(token=token, base_url=config.base_url, timeout=config.timeout)


__all__ = [
    "BoundingBox",
    "DesignNode",
    "FigmaClient",
    "FigmaClientError",
    "FrameNode",
    "Paint",
    "RGBColor",
    "TextNode",
    "TypeStyle",
    "create_client",
    "parse_node",
]
