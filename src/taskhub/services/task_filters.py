"""Task filter resolution.

A task listing applies at most one filter. The candidate filters are checked
in a fixed order and the first one whose criteria are present wins; every
later criterion is ignored even when supplied:

1. status (unless "all")
2. priority
3. label IDs
4. due-date range (start and end both given)
5. text search (non-blank)
6. no filter

The order lives in ``FILTER_STRATEGIES`` so it can be inspected and tested
directly.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, time

from taskhub.models import Page, PageRequest, Priority, Task, TaskFilters
from taskhub.repositories import TaskRepository

logger = logging.getLogger(__name__)

QueryFn = Callable[[TaskRepository, TaskFilters, PageRequest], Awaitable[Page[Task]]]


@dataclass(frozen=True)
class FilterStrategy:
    """A named filter: when it applies and how to run it."""

    name: str
    applies: Callable[[TaskFilters], bool]
    query: QueryFn


def _by_status(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    return repo.find_by_completed(f.status == "completed", page)


def _by_priority(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    priority = Priority.parse(f.priority)
    if priority is None:
        # Unrecognised priority degrades to the unfiltered listing
        logger.debug("ignoring unrecognised priority filter %r", f.priority)
        return repo.find_all(page)
    return repo.find_by_priority(priority, page)


def _by_labels(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    label_ids = list(dict.fromkeys(f.label_ids or []))
    return repo.find_by_all_labels(label_ids, len(label_ids), page)


def _by_due_date(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    assert f.start_date is not None and f.end_date is not None
    start = datetime.combine(f.start_date, time.min)
    end = datetime.combine(f.end_date, time.max)
    return repo.find_by_due_date_range(start, end, page)


def _by_search(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    assert f.search is not None
    return repo.find_by_text_match(f.search, page)


def _unfiltered(
    repo: TaskRepository, f: TaskFilters, page: PageRequest
) -> Awaitable[Page[Task]]:
    return repo.find_all(page)


FILTER_STRATEGIES: tuple[FilterStrategy, ...] = (
    FilterStrategy(
        "status",
        lambda f: f.status is not None and f.status != "all",
        _by_status,
    ),
    FilterStrategy("priority", lambda f: f.priority is not None, _by_priority),
    FilterStrategy("labels", lambda f: bool(f.label_ids), _by_labels),
    FilterStrategy(
        "due_date",
        lambda f: f.start_date is not None and f.end_date is not None,
        _by_due_date,
    ),
    FilterStrategy(
        "search",
        lambda f: f.search is not None and f.search.strip() != "",
        _by_search,
    ),
    FilterStrategy("all", lambda f: True, _unfiltered),
)


def select_strategy(filters: TaskFilters) -> FilterStrategy:
    """Return the first strategy whose criteria are present."""
    return next(s for s in FILTER_STRATEGIES if s.applies(filters))


class TaskFilterResolver:
    """Resolves task filters to a single repository query."""

    def __init__(self, task_repository: TaskRepository):
        self.repository = task_repository

    async def resolve(
        self, filters: TaskFilters, page_request: PageRequest
    ) -> Page[Task]:
        """Run the highest-precedence filter present in ``filters``.

        Args:
            filters: Filter criteria; all fields optional
            page_request: Page, size and sort to apply

        Returns:
            Page of matching tasks (possibly empty)
        """
        strategy = select_strategy(filters)
        logger.debug(
            "listing tasks with %s filter (page=%d size=%d)",
            strategy.name,
            page_request.page,
            page_request.size,
        )
        return await strategy.query(self.repository, filters, page_request)
