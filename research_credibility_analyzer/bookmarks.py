"""Bookmark storage for analysis results."""

import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Protocol

from pydantic import ValidationError

from .errors import DuplicateBookmarkError
from .models import AnalysisResult, BookmarkedPaper
from .utils.cache import load_cache, save_cache

logger = logging.getLogger(__name__)


class BookmarkStore(Protocol):
    """Narrow persistence interface; the analysis core does not depend on the backend."""

    def list(self) -> List[BookmarkedPaper]: ...

    def add(self, analysis: AnalysisResult, notes: Optional[str] = None) -> BookmarkedPaper: ...

    def remove(self, paper_id: str) -> bool: ...

    def get(self, paper_id: str) -> Optional[BookmarkedPaper]: ...

    def is_bookmarked(self, paper_id: str) -> bool: ...

    def update_notes(self, bookmark_id: str, notes: str) -> bool: ...


class JSONBookmarkStore:
    """Bookmarks kept as a JSON list in a single file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> List[BookmarkedPaper]:
        bookmarks = []
        for entry in load_cache(self.path, default=[]):
            try:
                bookmarks.append(BookmarkedPaper.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable bookmark entry in {self.path}: {e.error_count()} errors")
        return bookmarks

    def _backup_unreadable_file(self) -> None:
        """Move a corrupted bookmarks file aside so a write cannot silently discard it."""
        if not self.path.exists():
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                if isinstance(json.load(f), list):
                    return
        except json.JSONDecodeError:
            pass
        backup = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time() * 1000)}")
        os.replace(self.path, backup)
        logger.warning(f"Bookmarks file {self.path} was unreadable; moved it to {backup}")

    def _save(self, bookmarks: List[BookmarkedPaper]) -> None:
        self._backup_unreadable_file()
        data = [b.model_dump(mode='json', by_alias=True) for b in bookmarks]
        if not save_cache(self.path, data):
            raise OSError(f"Could not write bookmarks file {self.path}")

    def list(self) -> List[BookmarkedPaper]:
        """All bookmarks, most recent first."""
        return sorted(self._load(), key=lambda b: b.bookmarked_at, reverse=True)

    def add(self, analysis: AnalysisResult, notes: Optional[str] = None) -> BookmarkedPaper:
        bookmarks = self._load()
        paper_id = analysis.paper.id
        if any(b.analysis.paper.id == paper_id for b in bookmarks):
            raise DuplicateBookmarkError(f"Paper already bookmarked: {paper_id}")

        bookmark = BookmarkedPaper(
            id=f"{paper_id}-{int(time.time() * 1000)}",
            analysis=analysis,
            bookmarked_at=datetime.now(timezone.utc).isoformat(),
            notes=notes,
        )
        bookmarks.append(bookmark)
        self._save(bookmarks)
        logger.info(f"Bookmarked {paper_id} as {bookmark.id}")
        return bookmark

    def remove(self, paper_id: str) -> bool:
        bookmarks = self._load()
        remaining = [b for b in bookmarks if b.analysis.paper.id != paper_id]
        if len(remaining) == len(bookmarks):
            return False
        self._save(remaining)
        logger.info(f"Removed bookmark for {paper_id}")
        return True

    def get(self, paper_id: str) -> Optional[BookmarkedPaper]:
        for bookmark in self._load():
            if bookmark.analysis.paper.id == paper_id:
                return bookmark
        return None

    def is_bookmarked(self, paper_id: str) -> bool:
        return self.get(paper_id) is not None

    def update_notes(self, bookmark_id: str, notes: str) -> bool:
        """Attach notes to a bookmark. The wrapped analysis is left untouched."""
        bookmarks = self._load()
        for bookmark in bookmarks:
            if bookmark.id == bookmark_id:
                bookmark.notes = notes
                self._save(bookmarks)
                return True
        logger.warning(f"No bookmark with id {bookmark_id}")
        return False
