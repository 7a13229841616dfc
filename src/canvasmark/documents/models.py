"""Document and project package models.

The document model holds the single authoritative markdown string plus the
block table it references. The package model is the persisted exchange
shape read and written by the file I/O layer.
"""

from __future__ import annotations

from pydantic import Field

from canvasmark.blocks.models import BlockSnapshot, CamelModel, IsoDateTime
from canvasmark.themes import DEFAULT_EDITOR_THEME, DEFAULT_EXPORT_THEME


class DocumentThemes(CamelModel):
    """Theme selection for the editor surface and for exports."""

    editor: str = DEFAULT_EDITOR_THEME
    export: str = DEFAULT_EXPORT_THEME


class DocumentAssets(CamelModel):
    """Binary assets bundled with a document, keyed by asset id."""

    images: dict[str, str] = Field(default_factory=dict)
    previews: dict[str, str] = Field(default_factory=dict)
    externals: list[str] = Field(default_factory=list)


class DocumentModel(CamelModel):
    """A complete document.

    Attributes:
        id: Document id.
        title: Display title.
        content: The markdown source, replaced wholesale on every edit.
        themes: Editor and export theme ids.
        assets: Bundled assets.
        blocks: Block table keyed by block id.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last mutation.
    """

    id: str
    title: str
    content: str
    themes: DocumentThemes = Field(default_factory=DocumentThemes)
    assets: DocumentAssets = Field(default_factory=DocumentAssets)
    blocks: dict[str, BlockSnapshot] = Field(default_factory=dict)
    created_at: IsoDateTime
    updated_at: IsoDateTime


class PackageMeta(CamelModel):
    """Header of a persisted project package."""

    document_id: str
    title: str
    created_at: IsoDateTime
    updated_at: IsoDateTime
    schema_version: int


class DocumentPackage(CamelModel):
    """Persisted project package: ``{meta, content, blocks, assets}``."""

    meta: PackageMeta
    content: str
    blocks: dict[str, BlockSnapshot] = Field(default_factory=dict)
    assets: DocumentAssets = Field(default_factory=DocumentAssets)
