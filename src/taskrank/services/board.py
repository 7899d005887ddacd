"""BoardService — stories and rank-ordered task listings."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from taskrank.services._helpers import now_iso
from taskrank.services.base import BaseService
from taskrank.services.result import ServiceResult, failure
from taskrank.services.telemetry import traced

logger = logging.getLogger(__name__)


class BoardService(BaseService):
    """Story creation and read-side views of the board."""

    @traced
    def create_story(self, title: str) -> ServiceResult:
        op = "create_story"
        title = title.strip()
        if not title:
            return failure(op, "VALIDATION_FAILED", "Story title is required.", field="title")
        try:
            with self._board.transaction() as txn:
                row = txn.stories.insert(title=title, created=now_iso())
        except SQLAlchemyError as exc:
            logger.warning("create_story failed: %s", exc)
            return failure(op, "STORAGE_FAILURE", str(exc))
        return ServiceResult(ok=True, op=op, data=row)

    @traced
    def list_stories(self) -> ServiceResult:
        op = "list_stories"
        try:
            with self._board.transaction() as txn:
                items = txn.stories.list_all()
        except SQLAlchemyError as exc:
            return failure(op, "STORAGE_FAILURE", str(exc))
        return ServiceResult(ok=True, op=op, data={"items": items, "count": len(items)})

    @traced
    def list_tasks(self, story_id: int) -> ServiceResult:
        """Tasks of *story_id* in rank order, each tagged with its ``index``."""
        op = "list_tasks"
        try:
            with self._board.transaction() as txn:
                story = txn.stories.get(story_id)
                if story is None:
                    return failure(op, "NOT_FOUND", f"No story found with ID: {story_id}")
                rows = txn.tasks.list_ordered(story_id)
        except SQLAlchemyError as exc:
            return failure(op, "STORAGE_FAILURE", str(exc))

        items = [{**row, "index": i} for i, row in enumerate(rows)]
        return ServiceResult(
            ok=True,
            op=op,
            data={"story": story, "items": items, "count": len(items)},
        )
