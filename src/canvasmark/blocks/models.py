"""Pydantic models for embedded drawing blocks.

A block snapshot is the persisted state of one externally edited drawing:
its opaque canvas payload, the rendered preview image and display metadata.
Snapshots serialize with camelCase keys to match the project package format.
Optional keys without a value are left out of the output, and
timestamps are written as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` like the editor writes
them, so packages from the editor come back out unchanged.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def _to_iso_string(value: datetime) -> str:
    """UTC ISO 8601 with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    stamp = value.astimezone(UTC).isoformat(timespec="milliseconds")
    return stamp.removesuffix("+00:00") + "Z"


# Timestamp as stored in packages
IsoDateTime = Annotated[
    datetime, PlainSerializer(_to_iso_string, return_type=str, when_used="json")
]


class CamelModel(BaseModel):
    """Frozen base model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

class DrawnixPoint(CamelModel):
    """A point on the drawing canvas."""

    x: float
    y: float


class DrawnixStroke(CamelModel):
    """A freehand stroke."""

    color: str
    size: float
    points: list[DrawnixPoint] = Field(default_factory=list)


class DrawnixBlockData(CamelModel):
    """Canvas payload produced by the drawing editor.

    The document core treats the payload as opaque; this model only
    describes the shape the editor writes for a new, empty canvas.
    """

    width: int = 960
    height: int = 540
    background: str = "#ffffff"
    strokes: list[DrawnixStroke] = Field(default_factory=list)


class BlockSize(CamelModel):
    """Display size and zoom of a block."""

    width: int | float = 960
    height: int | float = 540
    zoom: int | float = 1


class BlockMeta(CamelModel):
    """Bookkeeping attached to a snapshot."""

    author: str | None = None
    updated_at: IsoDateTime | None = None
    read_only: bool | None = None

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class BlockSnapshot(CamelModel):
    """Persisted state of one embedded drawing block.

    Attributes:
        block_id: Stable id generated by the editor; also the table key.
        type: Kind tag, always ``"drawnix"``.
        data: Opaque canvas payload, None until first edit.
        preview: Rendered preview (usually a data URL), None until rendered.
        size: Display width/height/zoom.
        meta: Author and update bookkeeping.
        description: Optional caption, also used as image alt text.
    """

    model_config = ConfigDict(extra="allow")

    block_id: str
    type: Literal["drawnix"] = "drawnix"
    data: dict[str, Any] | None = None
    preview: str | None = None
    size: BlockSize = Field(default_factory=BlockSize)
    meta: BlockMeta = Field(default_factory=BlockMeta)
    description: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_description(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        dumped = handler(self)
        if self.description is None:
            dumped.pop("description", None)
        return dumped


def create_empty_drawnix_data() -> dict[str, Any]:
    """Payload for a blank canvas, in its serialized form."""
    return DrawnixBlockData().model_dump(by_alias=True)


def create_empty_snapshot(block_id: str) -> BlockSnapshot:
    """Create a snapshot for a freshly inserted block with no preview yet."""
    return BlockSnapshot(
        block_id=block_id,
        meta=BlockMeta(updated_at=_utcnow()),
        description="Drawnix block",
    )
