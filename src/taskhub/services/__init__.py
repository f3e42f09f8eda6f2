"""Services module for taskhub - Business logic layer."""

from .label_service import LabelService
from .task_filters import FILTER_STRATEGIES, TaskFilterResolver, select_strategy
from .task_service import TaskService

__all__ = [
    "TaskService",
    "TaskFilterResolver",
    "FILTER_STRATEGIES",
    "select_strategy",
    "LabelService",
]
