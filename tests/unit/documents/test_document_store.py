"""Tests for the document store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from canvasmark.blocks.models import BlockSnapshot, create_empty_snapshot
from canvasmark.config import DocumentConfig, Settings
from canvasmark.documents.meta import count_words
from canvasmark.documents.models import DocumentPackage, PackageMeta
from canvasmark.documents.package import parse_package, serialize_package
from canvasmark.documents.store import DocumentState, DocumentStore


class TestInitialState:
    """A freshly constructed store."""

    def test_default_document(self, store: DocumentStore, settings: Settings) -> None:
        """The store starts with the configured default document."""
        assert store.document.title == settings.document.default_title
        assert store.document.content == settings.document.default_content
        assert store.document.themes.editor == "aurora"
        assert store.document.themes.export == "classic"
        assert store.document.blocks == {}
        assert store.is_dirty is False

    def test_initial_meta(self, store: DocumentStore) -> None:
        """Meta is derived from the default content with no save time."""
        assert store.meta.word_count == count_words(store.document.content)
        assert store.meta.block_count == 0
        assert store.meta.last_saved_at is None

    def test_defaults_come_from_settings(self) -> None:
        """Custom document defaults are honoured."""
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            document=DocumentConfig(
                default_title="Notes", default_content="", editor_theme="noir"
            ),
        )
        store = DocumentStore(settings)
        assert store.document.title == "Notes"
        assert store.document.content == ""
        assert store.document.themes.editor == "noir"
        assert store.meta.paragraph_count == 0


class TestSetContent:
    """Replacing content."""

    def test_updates_content_and_meta(self, store: DocumentStore) -> None:
        """Content is replaced and statistics recomputed."""
        before = store.document.updated_at
        store.set_content("# Title\n\nHello world")
        assert store.document.content == "# Title\n\nHello world"
        assert store.meta.word_count == 3
        assert store.meta.paragraph_count == 2
        assert store.is_dirty is True
        assert store.document.updated_at >= before

    def test_previous_state_is_untouched(self, store: DocumentStore) -> None:
        """Old snapshots keep their values after a mutation."""
        old = store.state
        old_content = old.document.content
        store.set_content("changed")
        assert old.document.content == old_content
        assert old.is_dirty is False

    def test_keeps_last_saved_at(self, store: DocumentStore) -> None:
        """Editing after a save keeps the save time."""
        store.mark_saved()
        saved_at = store.meta.last_saved_at
        store.set_content("more")
        assert store.meta.last_saved_at == saved_at
        assert store.is_dirty is True


class TestTitleAndThemes:
    """Metadata edits that do not affect statistics."""

    def test_set_title(self, store: DocumentStore) -> None:
        """Renaming marks dirty but leaves meta alone."""
        meta = store.meta
        store.set_title("Quarterly report")
        assert store.document.title == "Quarterly report"
        assert store.is_dirty is True
        assert store.meta is meta

    def test_update_themes_independently(self, store: DocumentStore) -> None:
        """Setting one theme keeps the other."""
        store.set_themes(editor="noir")
        assert store.document.themes.editor == "noir"
        assert store.document.themes.export == "classic"
        store.set_themes(export="ink-night")
        assert store.document.themes.editor == "noir"
        assert store.document.themes.export == "ink-night"
        assert store.is_dirty is True

    def test_unknown_theme_is_kept_but_logged(
        self, store: DocumentStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unknown theme ids are stored and a warning is logged."""
        with caplog.at_level(logging.WARNING, logger="canvasmark.documents.store"):
            store.set_themes(editor="sepia")
        assert store.document.themes.editor == "sepia"
        assert "Unknown editor theme" in caplog.text


class TestBlocks:
    """Block table operations."""

    def test_register_block(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot
    ) -> None:
        """Registering adds the block and updates the count."""
        store.register_block(ready_snapshot)
        assert store.document.blocks["block-1"] == ready_snapshot
        assert store.meta.block_count == 1
        assert store.is_dirty is True

    def test_register_overwrites_same_id(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot
    ) -> None:
        """Registering an existing id replaces it."""
        store.register_block(create_empty_snapshot("block-1"))
        store.register_block(ready_snapshot)
        assert store.meta.block_count == 1
        assert store.document.blocks["block-1"].preview == ready_snapshot.preview

    def test_update_block(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot
    ) -> None:
        """The updater result replaces the stored snapshot."""
        store.register_block(ready_snapshot)
        store.mark_saved()
        store.update_block(
            "block-1", lambda s: s.model_copy(update={"description": "Updated"})
        )
        assert store.document.blocks["block-1"].description == "Updated"
        assert store.meta.block_count == 1
        assert store.is_dirty is True

    def test_update_missing_block_is_noop(self, store: DocumentStore) -> None:
        """Updating an absent id changes nothing and notifies nobody."""
        calls: list[DocumentState] = []
        store.subscribe(lambda state, _previous: calls.append(state))
        before = store.state
        snapshot_before = before.document.model_dump()

        def fail(_snapshot: BlockSnapshot) -> BlockSnapshot:
            raise AssertionError("updater must not run")

        store.update_block("missing-id", fail)

        assert store.state is before
        assert store.document.model_dump() == snapshot_before
        assert calls == []

    def test_remove_block(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot
    ) -> None:
        """Removing deletes the block and updates the count."""
        store.register_block(ready_snapshot)
        store.remove_block("block-1")
        assert store.document.blocks == {}
        assert store.meta.block_count == 0

    def test_remove_absent_block(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot
    ) -> None:
        """Removing an unknown id leaves the block table as it was."""
        store.register_block(ready_snapshot)
        store.remove_block("nope")
        assert list(store.document.blocks) == ["block-1"]
        assert store.meta.block_count == 1


class TestSaveAndReplace:
    """mark_saved, new_document and load_from_package."""

    def test_mark_saved(self, store: DocumentStore) -> None:
        """Saving clears dirty and stamps the time without touching content."""
        store.set_content("draft")
        document = store.document
        store.mark_saved()
        assert store.is_dirty is False
        assert store.meta.last_saved_at is not None
        assert store.document is document

    def test_new_document(self, store: DocumentStore) -> None:
        """A new document replaces everything with defaults."""
        old_id = store.document.id
        store.set_content("draft")
        store.register_block(create_empty_snapshot("b"))
        store.mark_saved()
        store.new_document()
        assert store.document.id != old_id
        assert store.document.blocks == {}
        assert store.is_dirty is False
        assert store.meta.block_count == 0
        assert store.meta.last_saved_at is None

    def test_load_from_package(self, store: DocumentStore) -> None:
        """Loading replaces the model and derives meta from the package."""
        created = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
        updated = datetime(2026, 3, 2, 17, 30, tzinfo=UTC)
        package = DocumentPackage(
            meta=PackageMeta(
                document_id="doc-42",
                title="Imported",
                created_at=created,
                updated_at=updated,
                schema_version=1,
            ),
            content="One two three\n\n{{drawnix:b1}}",
            blocks={"b1": create_empty_snapshot("b1")},
        )
        store.set_themes(editor="noir")
        store.load_from_package(package)

        assert store.document.id == "doc-42"
        assert store.document.title == "Imported"
        assert store.document.created_at == created
        assert store.document.updated_at == updated
        assert store.document.themes.editor == "aurora"
        assert list(store.document.blocks) == ["b1"]
        assert store.is_dirty is False
        assert store.meta.block_count == 1
        assert store.meta.paragraph_count == 2
        assert store.meta.last_saved_at == updated

    def test_package_round_trip(
        self, store: DocumentStore, ready_snapshot: BlockSnapshot, settings: Settings
    ) -> None:
        """Content and blocks survive export, serialization and reload."""
        store.set_content("Body\n\n{{drawnix:block-1}}\n\n{{page-break}}")
        store.register_block(ready_snapshot)

        text = serialize_package(store.build_package())
        other = DocumentStore(settings)
        other.load_from_package(parse_package(text))

        assert other.document.content == store.document.content
        assert list(other.document.blocks) == ["block-1"]
        assert other.document.blocks["block-1"].preview == ready_snapshot.preview
        assert other.document.id == store.document.id
        assert serialize_package(other.build_package()) == text


class TestSubscription:
    """Change notification."""

    def test_listener_receives_new_and_previous_state(
        self, store: DocumentStore
    ) -> None:
        """Listeners get (state, previous_state) after each commit."""
        seen: list[tuple[DocumentState, DocumentState]] = []
        store.subscribe(lambda state, previous: seen.append((state, previous)))
        first = store.state
        store.set_title("A")
        store.set_content("b c")

        assert len(seen) == 2
        assert seen[0][1] is first
        assert seen[0][0].document.title == "A"
        assert seen[1][1] is seen[0][0]
        assert seen[1][0] is store.state

    def test_listener_observes_complete_state(self, store: DocumentStore) -> None:
        """Content and meta are already consistent when listeners run."""
        checks: list[bool] = []
        store.subscribe(
            lambda state, _previous: checks.append(
                state.meta.word_count == count_words(state.document.content)
            )
        )
        store.set_content("one two three four")
        assert checks == [True]

    def test_unsubscribe(self, store: DocumentStore) -> None:
        """Unsubscribed listeners are not called; unsubscribing twice is safe."""
        calls: list[DocumentState] = []
        unsubscribe = store.subscribe(lambda state, _previous: calls.append(state))
        store.set_title("x")
        unsubscribe()
        unsubscribe()
        store.set_title("y")
        assert len(calls) == 1

    def test_listener_may_unsubscribe_during_notification(
        self, store: DocumentStore
    ) -> None:
        """A listener removing itself does not skip the others."""
        calls: list[str] = []

        def once(_state: DocumentState, _previous: DocumentState) -> None:
            calls.append("once")
            unsubscribe_once()

        unsubscribe_once = store.subscribe(once)
        store.subscribe(lambda _state, _previous: calls.append("always"))
        store.set_title("x")
        store.set_title("y")
        assert calls == ["once", "always", "always"]
