"""Tests for the Rich renderers."""

from __future__ import annotations

from taskrank.output.renderers import render_result
from taskrank.services.result import ServiceError, ServiceResult, failure


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


class TestTaskRenderer:
    def test_move_shows_previous_placement(self) -> None:
        result = _ok(
            "move_task",
            id=7,
            story_id=2,
            rank="g",
            index=0,
            previous_rank="t",
            previous_story_id=1,
            attempts=1,
        )
        output = render_result(result)
        assert "move_task" in output
        assert "rank: g" in output
        assert "previous_rank: t" in output
        assert "attempts" not in output

    def test_verbose_move_shows_attempts(self) -> None:
        result = _ok("move_task", id=7, rank="g", attempts=2)
        assert "attempts: 2" in render_result(result, verbose=True)

    def test_create_hides_version_unless_verbose(self) -> None:
        result = _ok("create_task", id=1, title="Write docs", rank="n", index=0, version=1)
        assert "version" not in render_result(result)
        assert "version: 1" in render_result(result, verbose=True)


class TestTables:
    def test_task_table(self) -> None:
        result = _ok(
            "list_tasks",
            story={"id": 1, "title": "Sprint"},
            items=[
                {"id": 5, "title": "First", "rank": "g", "index": 0},
                {"id": 3, "title": "Second", "rank": "n", "index": 1},
            ],
            count=2,
        )
        output = render_result(result)
        assert "Sprint (story 1)" in output
        assert output.index("First") < output.index("Second")

    def test_empty_task_table(self) -> None:
        result = _ok("list_tasks", story={"id": 1, "title": "Sprint"}, items=[], count=0)
        assert "No tasks." in render_result(result)

    def test_story_table(self) -> None:
        result = _ok("list_stories", items=[{"id": 1, "title": "Sprint", "task_count": 4}])
        output = render_result(result)
        assert "Sprint" in output
        assert "4" in output

    def test_no_stories(self) -> None:
        assert render_result(_ok("list_stories", items=[], count=0)) == "No stories."


class TestErrorRenderer:
    def test_code_in_output(self) -> None:
        output = render_result(failure("move_task", "INVALID_INDEX", "Indexes must be >= 0"))
        assert "ERROR" in output
        assert "[INVALID_INDEX]" in output

    def test_verbose_shows_detail(self) -> None:
        result = failure("move_task", "STALE_SOURCE", "moved", current_story_id=4)
        output = render_result(result, verbose=True)
        assert "current_story_id: 4" in output
        assert "kind: validation" in output


class TestCheckRenderer:
    def test_clean(self) -> None:
        result = _ok("check", issues=[], count=0)
        assert "No issues found." in render_result(result)

    def test_issues_listed(self) -> None:
        result = ServiceResult(
            ok=False,
            op="check",
            data={
                "issues": [
                    {
                        "kind": "invalid_rank",
                        "severity": "error",
                        "story_id": 1,
                        "message": "ends with 'a'",
                    }
                ],
                "count": 1,
            },
            error=ServiceError(code="CORRUPTED_STATE", message="1 rank integrity error(s)"),
        )
        output = render_result(result)
        assert "invalid_rank" in output
        assert "[story 1]" in output
        assert "1 issue(s)" in output


class TestMetaRendering:
    def test_span_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="delete_task",
            data={"id": 1},
            meta={
                "telemetry": {
                    "name": "OrderingService.delete_task",
                    "duration_ms": 1.5,
                    "children": [{"name": "commit", "duration_ms": 0.5}],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "OrderingService.delete_task" in output
        assert "commit" in output
