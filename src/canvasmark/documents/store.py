"""The document store: the single writable model of the open document.

The editing surface mutates the document only through the operations on
DocumentStore. Each operation builds the complete next DocumentState and
commits it with one assignment, then notifies subscribers. Diagnostics and
rendering read ``store.document`` and never write to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeAlias
from uuid import uuid4

from canvasmark.config import get_settings
from canvasmark.documents.meta import DocumentMeta, derive_meta
from canvasmark.documents.models import DocumentAssets, DocumentModel, DocumentThemes
from canvasmark.documents.package import build_document_package
from canvasmark.themes import get_editor_theme, get_export_theme

if TYPE_CHECKING:
    from collections.abc import Callable

    from canvasmark.blocks.models import BlockSnapshot
    from canvasmark.config import Settings
    from canvasmark.documents.models import DocumentPackage

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class DocumentState:
    """Immutable snapshot of everything the store holds.

    Attributes:
        document: The current document.
        meta: Statistics derived from the document.
        is_dirty: True when there are mutations not yet marked saved.
    """

    document: DocumentModel
    meta: DocumentMeta
    is_dirty: bool


StateListener: TypeAlias = "Callable[[DocumentState, DocumentState], None]"
BlockUpdater: TypeAlias = "Callable[[BlockSnapshot], BlockSnapshot]"


class DocumentStore:
    """Owns the open document and the only operations allowed to change it.

    Subscribers registered with ``subscribe`` are called with
    ``(state, previous_state)`` after every committed mutation.

    Attributes:
        settings: Source of defaults for new and loaded documents.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the store with a fresh default document.

        Args:
            settings: Settings to read defaults from; ``get_settings()`` if None.
        """
        self.settings = settings if settings is not None else get_settings()
        document = self._create_initial_document()
        self._state = DocumentState(
            document=document,
            meta=derive_meta(document.content, 0, None),
            is_dirty=False,
        )
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> DocumentState:
        """The current state snapshot."""
        return self._state

    @property
    def document(self) -> DocumentModel:
        """The current document."""
        return self._state.document

    @property
    def meta(self) -> DocumentMeta:
        """Statistics derived from the current document."""
        return self._state.meta

    @property
    def is_dirty(self) -> bool:
        """True when there are mutations not yet marked saved."""
        return self._state.is_dirty

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for committed state changes.

        Args:
            listener: Called with ``(state, previous_state)``.

        Returns:
            A function that removes the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: DocumentState, action: str) -> None:
        previous = self._state
        self._state = state
        logger.debug(
            "Document %s: %s (dirty=%s, words=%d, blocks=%d)",
            state.document.id,
            action,
            state.is_dirty,
            state.meta.word_count,
            state.meta.block_count,
        )
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener(state, previous)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _create_initial_document(self) -> DocumentModel:
        defaults = self.settings.document
        now = _utcnow()
        return DocumentModel(
            id=str(uuid4()),
            title=defaults.default_title,
            content=defaults.default_content,
            themes=self._default_themes(),
            assets=DocumentAssets(),
            blocks={},
            created_at=now,
            updated_at=now,
        )

    def _default_themes(self) -> DocumentThemes:
        defaults = self.settings.document
        return DocumentThemes(
            editor=defaults.editor_theme, export=defaults.export_theme
        )

    def _touch(self, **changes: Any) -> DocumentModel:
        """Copy the current document with changes and a fresh updated_at."""
        return self.document.model_copy(update={**changes, "updated_at": _utcnow()})

    def _dirty_state(self, document: DocumentModel, *, recount: bool) -> DocumentState:
        meta = (
            derive_meta(document.content, len(document.blocks), self.meta.last_saved_at)
            if recount
            else self.meta
        )
        return DocumentState(document=document, meta=meta, is_dirty=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_content(self, markdown: str) -> None:
        """Replace the document content wholesale."""
        document = self._touch(content=markdown)
        self._commit(self._dirty_state(document, recount=True), "set_content")

    def set_title(self, title: str) -> None:
        """Rename the document."""
        document = self._touch(title=title)
        self._commit(self._dirty_state(document, recount=False), "set_title")

    def set_themes(
        self, *, editor: str | None = None, export: str | None = None
    ) -> None:
        """Change the editor and/or export theme; omitted fields are kept."""
        if editor is not None and get_editor_theme(editor) is None:
            logger.warning("Unknown editor theme %r", editor)
        if export is not None and get_export_theme(export) is None:
            logger.warning("Unknown export theme %r", export)

        changes = {
            key: value
            for key, value in (("editor", editor), ("export", export))
            if value is not None
        }
        themes = self.document.themes.model_copy(update=changes)
        document = self._touch(themes=themes)
        self._commit(self._dirty_state(document, recount=False), "set_themes")

    def register_block(self, snapshot: BlockSnapshot) -> None:
        """Insert a block snapshot, replacing any snapshot with the same id."""
        blocks = {**self.document.blocks, snapshot.block_id: snapshot}
        document = self._touch(blocks=blocks)
        self._commit(self._dirty_state(document, recount=True), "register_block")

    def update_block(self, block_id: str, updater: BlockUpdater) -> None:
        """Replace a block snapshot with ``updater(current)``.

        Does nothing when no block has this id.
        """
        current = self.document.blocks.get(block_id)
        if current is None:
            logger.debug("update_block ignored: no block %r", block_id)
            return

        blocks = {**self.document.blocks, block_id: updater(current)}
        document = self._touch(blocks=blocks)
        self._commit(self._dirty_state(document, recount=True), "update_block")

    def remove_block(self, block_id: str) -> None:
        """Delete a block snapshot if present."""
        blocks = {
            key: value for key, value in self.document.blocks.items() if key != block_id
        }
        document = self._touch(blocks=blocks)
        self._commit(self._dirty_state(document, recount=True), "remove_block")

    def mark_saved(self) -> None:
        """Clear the dirty flag and record the save time."""
        state = DocumentState(
            document=self.document,
            meta=replace(self.meta, last_saved_at=_utcnow()),
            is_dirty=False,
        )
        self._commit(state, "mark_saved")

    def new_document(self) -> None:
        """Replace the whole model with a fresh default document."""
        document = self._create_initial_document()
        state = DocumentState(
            document=document,
            meta=derive_meta(document.content, 0, None),
            is_dirty=False,
        )
        self._commit(state, "new_document")

    def load_from_package(self, package: DocumentPackage) -> None:
        """Replace the whole model with the contents of a package.

        The package is assumed to be structurally valid. Themes are not
        part of the package and reset to the configured defaults.
        """
        document = DocumentModel(
            id=package.meta.document_id,
            title=package.meta.title,
            content=package.content,
            themes=self._default_themes(),
            assets=package.assets,
            blocks=dict(package.blocks),
            created_at=package.meta.created_at,
            updated_at=package.meta.updated_at,
        )
        state = DocumentState(
            document=document,
            meta=derive_meta(
                document.content, len(document.blocks), package.meta.updated_at
            ),
            is_dirty=False,
        )
        self._commit(state, "load_from_package")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def build_package(self) -> DocumentPackage:
        """Build the persisted package for the current document."""
        return build_document_package(self.document)
