"""OrderingService — rank placement for task moves and task creation.

A move reads the destination story's ordering around the target slot,
asks the :class:`RankKeyGenerator` for a key between the two neighbors,
and writes the new rank (plus the new story for cross-story moves) in
the same transaction.  Only the moved task's row changes.

Concurrent moves into the same slot would compute the same key.  Two
guards turn that into a retry instead of a duplicate rank:

- the placement UPDATE is conditioned on the ``version`` read at the
  start of the attempt;
- ``UNIQUE(story_id, rank)`` rejects the second writer of a key.

Either failure rolls the attempt back and re-reads the neighbors, up to
``ordering.max_retries`` times after the first attempt.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from taskrank.domain.moves import (
    INVALID_INDEX,
    MoveRequest,
    clamp_index,
    neighbor_window,
    split_neighbors,
    validate_move,
)
from taskrank.domain.rank import RankError, RankKeyGenerator
from taskrank.infrastructure.board import Board, BoardTransaction
from taskrank.services._helpers import now_iso
from taskrank.services.base import BaseService
from taskrank.services.result import ServiceResult, failure
from taskrank.services.telemetry import get_current_span, trace_span, traced

logger = logging.getLogger(__name__)

# A unit of work returns either a finished (failed) result or success data.
_Unit = Callable[[BoardTransaction], "ServiceResult | dict[str, Any]"]


class _PlacementConflict(Exception):
    """The version guard rejected a commit; the attempt must be retried."""


class CorruptedOrderingError(Exception):
    """Stored ranks around a slot cannot bound a new key."""

    def __init__(self, story_id: int, prev: str | None, next_: str | None, cause: RankError):
        super().__init__(f"Story {story_id} ordering is corrupted near ({prev!r}, {next_!r})")
        self.story_id = story_id
        self.prev = prev
        self.next = next_
        self.cause = cause


def _is_rank_collision(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "UNIQUE" in message and "tasks.rank" in message


class OrderingService(BaseService):
    """Places tasks within stories by rank."""

    def __init__(self, board: Board, *, generator: RankKeyGenerator | None = None) -> None:
        super().__init__(board)
        ordering = board.settings.ordering
        self._generator = generator or ordering.generator()
        self._max_retries = ordering.max_retries

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def move_task(
        self,
        task_id: int,
        source_index: int,
        destination_index: int,
        source_story_id: int,
        destination_story_id: int,
    ) -> ServiceResult:
        """Move a task to *destination_index* of *destination_story_id*.

        Rejected without touching storage when an index is negative or
        the task would land where it already is.
        """
        op = "move_task"
        request = MoveRequest(
            task_id=task_id,
            source_index=source_index,
            destination_index=destination_index,
            source_story_id=source_story_id,
            destination_story_id=destination_story_id,
        )
        code = validate_move(request)
        if code == INVALID_INDEX:
            return failure(
                op,
                code,
                "Indexes must be zero or greater",
                source_index=source_index,
                destination_index=destination_index,
            )
        if code is not None:
            return failure(op, code, f"Task {task_id} is already at index {source_index}")

        return self._run(op, lambda txn: self._place(txn, op, request))

    @traced
    def create_task(self, story_id: int, title: str, description: str = "") -> ServiceResult:
        """Create a task ranked before the current first task of *story_id*."""
        op = "create_task"
        title = title.strip()
        min_length = self._board.settings.tasks.min_title_length
        if len(title) < min_length:
            return failure(
                op,
                "VALIDATION_FAILED",
                f"Title should be at least {min_length} characters.",
                field="title",
            )

        def unit(txn: BoardTransaction) -> ServiceResult | dict[str, Any]:
            if not txn.stories.exists(story_id):
                return failure(op, "NOT_FOUND", f"No story found with ID: {story_id}")
            first = txn.tasks.first(story_id)
            head_rank = first["rank"] if first else None
            rank = self._generate(story_id, None, head_rank)
            row = txn.tasks.insert(
                story_id=story_id,
                title=title,
                description=description,
                rank=rank,
                created=now_iso(),
            )
            return {**row, "index": 0}

        return self._run(op, unit)

    @traced
    def get_task(self, task_id: int) -> ServiceResult:
        op = "get_task"
        try:
            with self._board.transaction() as txn:
                row = txn.tasks.get(task_id)
                if row is None:
                    return failure(op, "NOT_FOUND", f"No task found with ID: {task_id}")
                index = txn.tasks.position(task_id, row["story_id"], row["rank"])
        except SQLAlchemyError as exc:
            logger.warning("get_task %s failed: %s", task_id, exc)
            return failure(op, "STORAGE_FAILURE", str(exc))
        return ServiceResult(ok=True, op=op, data={**row, "index": index})

    @traced
    def delete_task(self, task_id: int) -> ServiceResult:
        """Delete a task.  Remaining tasks keep their ranks."""
        op = "delete_task"
        try:
            with self._board.transaction() as txn:
                if not txn.tasks.delete(task_id):
                    return failure(op, "NOT_FOUND", f"No task found with ID: {task_id}")
        except SQLAlchemyError as exc:
            logger.warning("delete_task %s failed: %s", task_id, exc)
            return failure(op, "STORAGE_FAILURE", str(exc))
        return ServiceResult(ok=True, op=op, data={"id": task_id})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _place(
        self, txn: BoardTransaction, op: str, request: MoveRequest
    ) -> ServiceResult | dict[str, Any]:
        task = txn.tasks.get(request.task_id)
        if task is None:
            return failure(op, "NOT_FOUND", f"No task found with ID: {request.task_id}")
        if task["story_id"] != request.source_story_id:
            return failure(
                op,
                "STALE_SOURCE",
                f"Task {request.task_id} is not in story {request.source_story_id}",
                current_story_id=task["story_id"],
            )
        story_id = request.destination_story_id
        if request.is_cross_story and not txn.stories.exists(story_id):
            return failure(op, "NOT_FOUND", f"No story found with ID: {story_id}")

        index = clamp_index(
            request.destination_index,
            txn.tasks.count(story_id, exclude_id=request.task_id),
        )
        if not request.is_cross_story and index == txn.tasks.position(
            request.task_id, story_id, task["rank"]
        ):
            return failure(
                op,
                "NO_OP",
                f"Task {request.task_id} is already at index {index}",
                destination_index=request.destination_index,
            )
        window = neighbor_window(index)
        with trace_span("neighbors") as span:
            rows = txn.tasks.list_ordered(
                story_id,
                skip=window.skip,
                limit=window.limit,
                exclude_id=request.task_id,
            )
            if span is not None:
                span.annotate("window", window._asdict())
        prev, nxt = split_neighbors(index, rows)
        rank = self._generate(
            story_id,
            prev["rank"] if prev else None,
            nxt["rank"] if nxt else None,
        )

        with trace_span("commit"):
            committed = txn.tasks.update_placement(
                request.task_id,
                rank=rank,
                expected_version=task["version"],
                modified=now_iso(),
                story_id=story_id if request.is_cross_story else None,
            )
        if not committed:
            raise _PlacementConflict(request.task_id)

        logger.debug(
            "Moved task %s to story %s index %s (rank %s -> %s)",
            request.task_id,
            story_id,
            index,
            task["rank"],
            rank,
        )
        return {
            "id": request.task_id,
            "story_id": story_id,
            "rank": rank,
            "index": txn.tasks.position(request.task_id, story_id, rank),
            "previous_rank": task["rank"],
            "previous_story_id": task["story_id"],
        }

    def _generate(self, story_id: int, prev: str | None, next_: str | None) -> str:
        try:
            rank = self._generator.generate(prev, next_)
        except RankError as exc:
            raise CorruptedOrderingError(story_id, prev, next_, exc) from exc
        span = get_current_span()
        if span is not None:
            span.annotate("rank", rank)
        return rank

    def _run(self, op: str, unit: _Unit) -> ServiceResult:
        """Run *unit* in a transaction, retrying conflicts up to ``max_retries`` times."""
        for attempt in range(1, self._max_retries + 2):
            try:
                with self._board.transaction() as txn:
                    outcome = unit(txn)
            except _PlacementConflict:
                logger.info("%s: version conflict, retrying (attempt %d)", op, attempt)
                continue
            except IntegrityError as exc:
                if not _is_rank_collision(exc):
                    logger.warning("%s failed: %s", op, exc)
                    return failure(op, "STORAGE_FAILURE", str(exc.orig))
                logger.info("%s: rank collision, retrying (attempt %d)", op, attempt)
                continue
            except CorruptedOrderingError as exc:
                logger.error(
                    "%s: corrupted ordering in story %s, neighbors (%r, %r): %s",
                    op,
                    exc.story_id,
                    exc.prev,
                    exc.next,
                    exc.cause,
                )
                return failure(
                    op,
                    "CORRUPTED_STATE",
                    str(exc),
                    story_id=exc.story_id,
                    prev=exc.prev,
                    next=exc.next,
                    reason=str(exc.cause),
                )
            except SQLAlchemyError as exc:
                logger.warning("%s failed: %s", op, exc)
                return failure(op, "STORAGE_FAILURE", str(exc))

            if isinstance(outcome, ServiceResult):
                return outcome
            return ServiceResult(ok=True, op=op, data={**outcome, "attempts": attempt})

        return failure(
            op,
            "RANK_CONFLICT",
            f"Concurrent writers kept claiming the same slot ({self._max_retries + 1} attempts)",
            attempts=self._max_retries + 1,
        )
