"""ServiceResult and ServiceError — the service contract.

INVARIANT: All service-layer methods return ServiceResult.
``ok`` is the caller-facing success flag; ``error.code`` and
``error.detail["kind"]`` tell failure causes apart.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

ErrorKind = Literal["validation", "not_found", "conflict", "storage", "corrupted"]

# code -> kind
ERROR_KINDS: dict[str, ErrorKind] = {
    "INVALID_INDEX": "validation",
    "NO_OP": "validation",
    "VALIDATION_FAILED": "validation",
    "STALE_SOURCE": "validation",
    "NOT_FOUND": "not_found",
    "RANK_CONFLICT": "conflict",
    "STORAGE_FAILURE": "storage",
    "CORRUPTED_STATE": "corrupted",
}


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> str | None:
        return self.detail.get("kind")


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"move_task"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """Build a failed ServiceResult, tagging ``detail["kind"]`` from *code*."""
    kind = ERROR_KINDS.get(code)
    if kind is not None:
        detail.setdefault("kind", kind)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )
