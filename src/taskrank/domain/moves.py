"""Move planning — request validation and neighbor selection.

A move says "put task X at ``destination_index`` of story D, it used to be
at ``source_index`` of story S".  The destination ordering is always read
with X itself excluded, so the target slot sits between positions
``destination_index - 1`` and ``destination_index`` of that ordering,
whether the move stays in one story or crosses to another.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple, TypeVar

from pydantic import BaseModel

INVALID_INDEX = "INVALID_INDEX"
NO_OP = "NO_OP"

_Row = TypeVar("_Row")


class MoveRequest(BaseModel):
    """A drag-and-drop move as reported by the caller."""

    model_config = {"frozen": True}

    task_id: int
    source_index: int
    destination_index: int
    source_story_id: int
    destination_story_id: int

    @property
    def is_cross_story(self) -> bool:
        return self.source_story_id != self.destination_story_id


class NeighborWindow(NamedTuple):
    """Offset/limit pair for the ordered neighbor query."""

    skip: int
    limit: int


def validate_move(request: MoveRequest) -> str | None:
    """Return an error code if *request* must be rejected, else None."""
    if request.source_index < 0 or request.destination_index < 0:
        return INVALID_INDEX
    if not request.is_cross_story and request.source_index == request.destination_index:
        return NO_OP
    return None


def clamp_index(destination_index: int, size: int) -> int:
    """Clamp a destination past the end of an ordering of *size* tasks to an append."""
    return min(destination_index, size)


def neighbor_window(destination_index: int) -> NeighborWindow:
    """Rows to fetch from the destination ordering (moved task excluded).

    Index 0 needs only the current head, which becomes ``next``.
    Any other index needs the pair straddling the slot.
    """
    if destination_index == 0:
        return NeighborWindow(skip=0, limit=1)
    return NeighborWindow(skip=destination_index - 1, limit=2)


def split_neighbors(
    destination_index: int, rows: Sequence[_Row]
) -> tuple[_Row | None, _Row | None]:
    """Map fetched rows onto ``(prev, next)``; either may be None at a boundary."""
    if destination_index == 0:
        return None, (rows[0] if rows else None)
    prev = rows[0] if len(rows) > 0 else None
    nxt = rows[1] if len(rows) > 1 else None
    return prev, nxt
