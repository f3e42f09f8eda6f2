"""taskhub domain models.

This package contains Pydantic models that represent the core domain entities
of taskhub. They are used throughout the application for data validation,
serialization, and type safety.
"""

from .config_models import AppConfig
from .core import (
    BatchItemOutcome,
    BatchUpdateItem,
    BatchUpdateRequest,
    BatchUpdateResponse,
    Label,
    LabelCreate,
    Priority,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from .paging import Page, PageRequest, SortField, SortOrder

__all__ = [
    # Task models
    "Priority",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    # Batch models
    "BatchUpdateItem",
    "BatchUpdateRequest",
    "BatchUpdateResponse",
    "BatchItemOutcome",
    # Label models
    "Label",
    "LabelCreate",
    # Paging
    "Page",
    "PageRequest",
    "SortField",
    "SortOrder",
    # Config models
    "AppConfig",
]
