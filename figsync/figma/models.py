"""Pydantic models for Figma node data.

Raw JSON from the Figma REST API is validated here, at the client boundary,
into a closed union of two node kinds: ``TextNode`` for ``type == "TEXT"``
and ``FrameNode`` for everything else. Optional fields are defaulted so the
spec extractor never has to probe dictionaries.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator


class RGBColor(BaseModel):
    """Color channels in the 0..1 range as Figma reports them."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class Paint(BaseModel):
    """A fill or stroke paint. Only SOLID paints carry a usable color."""

    type: str
    color: RGBColor | None = None
    opacity: float | None = None


class BoundingBox(BaseModel):
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None


class TypeStyle(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    font_family: str | None = Field(default=None, alias="fontFamily")
    font_size: float | None = Field(default=None, alias="fontSize")
    font_weight: float | None = Field(default=None, alias="fontWeight")
    line_height_px: float | None = Field(default=None, alias="lineHeightPx")
    letter_spacing: float | None = Field(default=None, alias="letterSpacing")


class BaseNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str = ""
    type: str
    absolute_bounding_box: BoundingBox | None = Field(
        default=None, alias="absoluteBoundingBox"
    )
    fills: list[Paint] = Field(default_factory=list)
    strokes: list[Paint] = Field(default_factory=list)
    padding_left: float | None = Field(default=None, alias="paddingLeft")
    padding_right: float | None = Field(default=None, alias="paddingRight")
    padding_top: float | None = Field(default=None, alias="paddingTop")
    padding_bottom: float | None = Field(default=None, alias="paddingBottom")
    item_spacing: float | None = Field(default=None, alias="itemSpacing")
    children: list[DesignNode] = Field(default_factory=list)

    # The API sends null for some empty lists
    @field_validator("fills", "strokes", "children", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class TextNode(BaseNode):
    type: Literal["TEXT"] = "TEXT"
    style: TypeStyle = Field(default_factory=TypeStyle)

    @field_validator("style", mode="before")
    @classmethod
    def _null_as_unstyled(cls, value: Any) -> Any:
        return {} if value is None else value


class FrameNode(BaseNode):
    """Any non-text node: frames, groups, components, shapes."""


def _node_kind(value: Any) -> str:
    node_type = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return "text" if node_type == "TEXT" else "frame"


DesignNode = Annotated[
    Union[
        Annotated[TextNode, Tag("text")],
        Annotated[FrameNode, Tag("frame")],
    ],
    Discriminator(_node_kind),
]

BaseNode.model_rebuild()
TextNode.model_rebuild()
FrameNode.model_rebuild()


def parse_node(raw: dict[str, Any]) -> TextNode | FrameNode:
    """Validate a raw Figma ``document`` object into a typed node tree."""
    if raw.get("type") == "TEXT":
        return TextNode.model_validate(raw)
    return FrameNode.model_validate(raw)
