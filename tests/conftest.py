"""Shared test fixtures and configuration.

Provides in-memory SQLite stores and keeps tests away from the real
config, data and log directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
import pytest_asyncio

from taskhub.adapters.sqlite.connection import open_connection
from taskhub.adapters.sqlite.label_repository import SqliteLabelRepository
from taskhub.adapters.sqlite.task_repository import SqliteTaskRepository
from taskhub.models import LabelCreate
from taskhub.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path):
    """Send log files to tmp_path and reset the logger singleton afterwards."""
    import taskhub.utils.logger as logger_mod

    logger_mod._logger = None
    with patch("taskhub.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    app_logger = logging.getLogger("taskhub")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory."""
    from taskhub.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("taskhub.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("taskhub.services.config_service.user_data_dir", return_value=tmpdir):
            yield ConfigService()
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# SQLite stores
# ---------------------------------------------------------------------------


@pytest.fixture
def connection():
    """Fresh in-memory database with the full schema applied."""
    conn = open_connection(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def task_repo(connection):
    return SqliteTaskRepository(connection=connection)


@pytest.fixture
def label_repo(connection):
    return SqliteLabelRepository(connection=connection)


@pytest.fixture
def task_service(task_repo, label_repo):
    return TaskService(task_repo, label_repo)


@pytest_asyncio.fixture
async def labels(label_repo):
    """Three labels: bug, feature and docs."""
    bug = await label_repo.create(LabelCreate(name="bug", color="#FF0000"))
    feature = await label_repo.create(LabelCreate(name="feature", color="green"))
    docs = await label_repo.create(LabelCreate(name="docs"))
    return {"bug": bug, "feature": feature, "docs": docs}
