"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taskrank.toml only contains
overrides.  A fresh board needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from taskrank.domain.rank import DEFAULT_ALPHABET, RankKeyGenerator


class BoardConfig(BaseModel):
    """[board] section."""

    model_config = {"frozen": True}

    name: str = "my-board"


class OrderingConfig(BaseModel):
    """[ordering] section."""

    model_config = {"frozen": True}

    alphabet: str = DEFAULT_ALPHABET
    # Retries after the first attempt.
    max_retries: int = Field(default=3, ge=0)

    @field_validator("alphabet")
    @classmethod
    def _check_alphabet(cls, value: str) -> str:
        # Raises ValueError for short or unsorted alphabets.
        RankKeyGenerator(value)
        return value

    def generator(self) -> RankKeyGenerator:
        return RankKeyGenerator(self.alphabet)


class TasksConfig(BaseModel):
    """[tasks] section."""

    model_config = {"frozen": True}

    min_title_length: int = Field(default=3, ge=1)


class TaskrankConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    board: BoardConfig = Field(default_factory=BoardConfig)
    ordering: OrderingConfig = Field(default_factory=OrderingConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
