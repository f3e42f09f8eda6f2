"""Repository interfaces for taskhub.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskhub.adapters.sqlite (local storage)
"""

from .repository import LabelRepository, TaskRepository

__all__ = [
    "TaskRepository",
    "LabelRepository",
]
