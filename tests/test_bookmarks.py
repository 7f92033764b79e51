"""Tests for research_credibility_analyzer.bookmarks module."""

import json
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from research_credibility_analyzer.bookmarks import JSONBookmarkStore
from research_credibility_analyzer.errors import DuplicateBookmarkError


@pytest.fixture
def store():
    with tempfile.TemporaryDirectory() as temp_dir:
        yield JSONBookmarkStore(Path(temp_dir) / "bookmarks.json")


class TestJSONBookmarkStore:
    """Test cases for JSONBookmarkStore."""

    def test_empty_store(self, store):
        """Test that a store without a file lists nothing."""
        assert store.list() == []
        assert store.is_bookmarked("W1") is False

    def test_add_and_get(self, store, make_result):
        """Test adding a bookmark and reading it back."""
        result = make_result("W1")
        with patch('research_credibility_analyzer.bookmarks.time.time', return_value=1700000000.5):
            bookmark = store.add(result, notes="promising")

        assert bookmark.id == "W1-1700000000500"
        assert bookmark.notes == "promising"
        assert store.is_bookmarked("W1")
        assert store.get("W1") == bookmark
        assert store.get("W1").analysis == result

    def test_persisted_with_wire_names(self, store, make_result):
        """Test that the file stores camelCase keys and survives a new store instance."""
        store.add(make_result("W1"))

        with open(store.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        assert data[0]["bookmarkedAt"]
        assert data[0]["analysis"]["credibility"]["totalScore"] == 7.0
        assert JSONBookmarkStore(store.path).is_bookmarked("W1")

    def test_duplicate_rejected(self, store, make_result):
        """Test that bookmarking the same paper twice raises."""
        store.add(make_result("W1"))
        with pytest.raises(DuplicateBookmarkError):
            store.add(make_result("W1"))
        assert len(store.list()) == 1

    def test_list_most_recent_first(self, store, make_result):
        """Test that bookmarks are listed newest first."""
        store.add(make_result("W1"))
        store.add(make_result("W2"))
        data = json.loads(store.path.read_text(encoding='utf-8'))
        data[0]["bookmarkedAt"] = "2020-01-01T00:00:00+00:00"
        data[1]["bookmarkedAt"] = "2021-01-01T00:00:00+00:00"
        store.path.write_text(json.dumps(data), encoding='utf-8')

        assert [b.analysis.paper.id for b in store.list()] == ["W2", "W1"]

    def test_remove(self, store, make_result):
        """Test removing a bookmark by paper id."""
        store.add(make_result("W1"))
        assert store.remove("W1") is True
        assert store.remove("W1") is False
        assert store.list() == []

    def test_update_notes(self, store, make_result):
        """Test that notes change while the analysis stays the same."""
        result = make_result("W1")
        bookmark = store.add(result)

        assert store.update_notes(bookmark.id, "re-check sample size") is True
        updated = store.get("W1")
        assert updated.notes == "re-check sample size"
        assert updated.analysis == result
        assert store.update_notes("missing-id", "x") is False

    def test_invalid_entries_skipped(self, store, make_result):
        """Test that unreadable entries in the file are skipped."""
        store.add(make_result("W1"))
        data = json.loads(store.path.read_text(encoding='utf-8'))
        data.append({"id": "broken"})
        store.path.write_text(json.dumps(data), encoding='utf-8')

        assert [b.analysis.paper.id for b in store.list()] == ["W1"]

    def test_save_failure_raises(self, store, make_result):
        """Test that a failed write is reported as OSError."""
        with patch('research_credibility_analyzer.bookmarks.save_cache', return_value=False):
            with pytest.raises(OSError):
                store.add(make_result("W1"))

    def test_corrupted_file_backed_up_before_write(self, store, make_result):
        """Test that a corrupted file is moved aside instead of being overwritten."""
        store.path.write_text('[{"id": "W0-1", "analysis": ', encoding='utf-8')
        assert store.list() == []

        with patch('research_credibility_analyzer.bookmarks.time.time', return_value=1700000000.5):
            store.add(make_result("W1"))

        backup = store.path.with_name("bookmarks.json.corrupt-1700000000500")
        assert backup.read_text(encoding='utf-8') == '[{"id": "W0-1", "analysis": '
        assert [b.analysis.paper.id for b in store.list()] == ["W1"]

    def test_non_list_file_backed_up_before_write(self, store, make_result):
        """Test that a file holding something other than a list is preserved."""
        store.path.write_text('{"W0": {}}', encoding='utf-8')
        store.add(make_result("W1"))

        backups = list(store.path.parent.glob("bookmarks.json.corrupt-*"))
        assert len(backups) == 1
        assert json.loads(backups[0].read_text(encoding='utf-8')) == {"W0": {}}
