"""BaseService — foundation for all taskrank services.

Every service receives a :class:`Board` at construction time.  Services
own their transaction boundaries via ``self._board.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskrank.infrastructure.board import Board


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class OrderingService(BaseService):
            def move_task(self, task_id: int, ...) -> ServiceResult:
                with self._board.transaction() as txn:
                    ...
    """

    def __init__(self, board: Board) -> None:
        self._board = board
