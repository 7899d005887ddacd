"""CheckService — rank integrity.

Linter pattern: report, never repair.  Nothing here rebalances keys.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from taskrank.domain.rank import InvalidRankError
from taskrank.services.base import BaseService
from taskrank.services.result import ERROR_KINDS, ServiceError, ServiceResult, failure
from taskrank.services.telemetry import trace_span, traced

SEVERITY_ERROR = "error"

ISSUE_DUPLICATE_RANK = "duplicate_rank"
ISSUE_INVALID_RANK = "invalid_rank"


class CheckService(BaseService):
    """Reports stored orderings that break rank invariants."""

    @traced
    def check(self) -> ServiceResult:
        op = "check"
        generator = self._board.settings.ordering.generator()
        issues: list[dict[str, Any]] = []
        try:
            with self._board.transaction() as txn:
                with trace_span("duplicate_ranks"):
                    for row in txn.tasks.duplicate_ranks():
                        issues.append(
                            {
                                "kind": ISSUE_DUPLICATE_RANK,
                                "severity": SEVERITY_ERROR,
                                "story_id": row["story_id"],
                                "rank": row["rank"],
                                "message": (
                                    f"{row['holders']} tasks in story {row['story_id']} "
                                    f"share rank {row['rank']!r}"
                                ),
                            }
                        )
                with trace_span("invalid_ranks"):
                    for row in txn.tasks.all_ranks():
                        try:
                            generator.validate(row["rank"])
                        except InvalidRankError as exc:
                            issues.append(
                                {
                                    "kind": ISSUE_INVALID_RANK,
                                    "severity": SEVERITY_ERROR,
                                    "story_id": row["story_id"],
                                    "task_id": row["id"],
                                    "rank": row["rank"],
                                    "message": exc.reason,
                                }
                            )
        except SQLAlchemyError as exc:
            return failure(op, "STORAGE_FAILURE", str(exc))

        errors = sum(1 for issue in issues if issue["severity"] == SEVERITY_ERROR)
        data = {"issues": issues, "count": len(issues)}
        if errors:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code="CORRUPTED_STATE",
                    message=f"{errors} rank integrity error(s)",
                    detail={"kind": ERROR_KINDS["CORRUPTED_STATE"]},
                ),
            )
        return ServiceResult(ok=True, op=op, data=data)
