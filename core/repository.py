"""In-memory board collection with best-effort durable storage."""

from __future__ import annotations

import logging
import warnings
from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from core.errors import NotFoundError, PersistenceError, PersistenceWarning
from core.ledger import EntitlementLedger
from core.models import VisionBoard
from core.persistence import SAVED_VISION_BOARDS_KEY, JsonKeyValueStore

logger = logging.getLogger(__name__)


class BoardRepository:
    """
    Owns the list of saved vision boards.

    Callers only ever see deep copies; the collection is changed exclusively
    through the methods below. After each change the whole collection is
    written to the store under `savedVisionBoards`. If that write fails the
    error is logged and emitted as a PersistenceWarning, and the in-memory
    collection keeps the change.
    """

    def __init__(self, store: JsonKeyValueStore, ledger: Optional[EntitlementLedger] = None):
        self.store = store
        self.ledger = ledger
        self._boards: list[VisionBoard] = []
        # Raw entries that failed validation; written back untouched on save
        self._unreadable: list = []
        self.last_persistence_error: Optional[str] = None
        self._load()

    def _load(self) -> None:
        raw = self.store.get(SAVED_VISION_BOARDS_KEY)
        if raw is None:
            return
        if not isinstance(raw, list):
            logger.warning(f"Ignoring {SAVED_VISION_BOARDS_KEY}: expected a list")
            return
        boards = []
        for index, item in enumerate(raw):
            try:
                boards.append(VisionBoard.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable vision board at index {index}: {e}")
                self._unreadable.append(item)
        self._boards = boards
        logger.info(f"Loaded {len(boards)} vision boards ({len(self._unreadable)} unreadable)")

    def _save(self) -> None:
        payload = [board.to_json_dict() for board in self._boards] + list(self._unreadable)
        try:
            self.store.set(SAVED_VISION_BOARDS_KEY, payload)
            self.last_persistence_error = None
        except PersistenceError as e:
            self.last_persistence_error = str(e)
            logger.warning(f"Failed to save vision boards: {e}")
            warnings.warn(str(e), PersistenceWarning, stacklevel=3)

    @staticmethod
    def _owned(board: VisionBoard, owner_id: Optional[UUID]) -> bool:
        return owner_id is None or board.owner_id == owner_id

    def _visible(self, owner_id: Optional[UUID]) -> list[VisionBoard]:
        return [board for board in self._boards if self._owned(board, owner_id)]

    def _index_of(self, board_id: UUID, owner_id: Optional[UUID] = None) -> Optional[int]:
        for index, board in enumerate(self._boards):
            if board.id == board_id and self._owned(board, owner_id):
                return index
        return None

    # ------------------------------------------------------------------
    # Mutations
    #
    # Every method taking `owner_id` treats a board owned by someone else
    # as missing. `owner_id=None` addresses all boards.
    # ------------------------------------------------------------------

    def create(self, board: VisionBoard) -> VisionBoard:
        """Add a board and count it against the ledger's current user."""
        stored = board.model_copy(deep=True)
        self._boards = [*self._boards, stored]
        self._save()
        if self.ledger is not None:
            self.ledger.increment_board_count()
        logger.info(f"Saved vision board {stored.id} ({stored.title!r})")
        return stored.model_copy(deep=True)

    def update(self, board: VisionBoard) -> bool:
        """Replace the board with the same id. Unknown ids are ignored."""
        index = self._index_of(board.id)
        if index is None:
            logger.debug(f"update: no board {board.id}")
            return False
        boards = list(self._boards)
        boards[index] = board.model_copy(deep=True)
        self._boards = boards
        self._save()
        return True

    def delete(self, board_id: UUID, owner_id: Optional[UUID] = None) -> bool:
        """Remove a board. Unknown ids are ignored."""
        index = self._index_of(board_id, owner_id)
        if index is None:
            logger.debug(f"delete: no board {board_id}")
            return False
        self._boards = self._boards[:index] + self._boards[index + 1:]
        self._save()
        logger.info(f"Deleted vision board {board_id}")
        return True

    def _mutate(self, board_id: UUID, action: str, owner_id: Optional[UUID]) -> Optional[VisionBoard]:
        index = self._index_of(board_id, owner_id)
        if index is None:
            logger.debug(f"{action}: no board {board_id}")
            return None
        updated = self._boards[index].model_copy(deep=True)
        getattr(updated, action)()
        boards = list(self._boards)
        boards[index] = updated
        self._boards = boards
        self._save()
        return updated.model_copy(deep=True)

    def increment_view_count(self, board_id: UUID, owner_id: Optional[UUID] = None) -> Optional[VisionBoard]:
        return self._mutate(board_id, "increment_view_count", owner_id)

    def toggle_favorite(self, board_id: UUID, owner_id: Optional[UUID] = None) -> Optional[VisionBoard]:
        return self._mutate(board_id, "toggle_favorite", owner_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, board_id: UUID, owner_id: Optional[UUID] = None) -> VisionBoard:
        index = self._index_of(board_id, owner_id)
        if index is None:
            raise NotFoundError(f"No vision board with id {board_id}")
        return self._boards[index].model_copy(deep=True)

    def list(self, owner_id: Optional[UUID] = None) -> list[VisionBoard]:
        """All boards in insertion order, optionally only one owner's."""
        return [board.model_copy(deep=True) for board in self._visible(owner_id)]

    def list_favorites(self, owner_id: Optional[UUID] = None) -> list[VisionBoard]:
        return [board.model_copy(deep=True) for board in self._visible(owner_id) if board.is_favorite]

    def list_recent(self, n: int = 5, owner_id: Optional[UUID] = None) -> list[VisionBoard]:
        """The n most recently created boards, newest first."""
        if n <= 0:
            return []
        ordered = sorted(self._visible(owner_id), key=lambda board: board.created_at, reverse=True)
        return [board.model_copy(deep=True) for board in ordered[:n]]

    def search(self, query: str, owner_id: Optional[UUID] = None) -> list[VisionBoard]:
        return [board.model_copy(deep=True) for board in self._visible(owner_id) if board.matches(query)]

    def total_boards(self, owner_id: Optional[UUID] = None) -> int:
        return len(self._visible(owner_id))

    def total_views(self, owner_id: Optional[UUID] = None) -> int:
        return sum(board.view_count for board in self._visible(owner_id))

    def __len__(self) -> int:
        return len(self._boards)
