"""Repository helpers for task and story data access."""

from taskrank.infrastructure.repositories.stories import StoryRepository
from taskrank.infrastructure.repositories.tasks import TaskRepository

__all__ = ["StoryRepository", "TaskRepository"]
