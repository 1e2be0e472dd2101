"""Root pytest configuration for all tests.

Provides a temporary locales directory and a factory for task
configurations pointing at it.
"""

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from src.sync_tasks.config import TaskConfig

# python-lokalise-api and urllib3 are chatty at DEBUG level
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture
def locales_path(tmp_path) -> Path:
    """Empty locales directory inside the test's temporary directory."""
    path = tmp_path / "locales"
    path.mkdir()
    return path


@pytest.fixture
def make_config(locales_path):
    """Factory building a TaskConfig rooted at ``locales_path``."""
    def _make(**overrides) -> TaskConfig:
        values = {
            'api_token': 'test-token',
            'project_id': '123.abc',
            'locales_path': locales_path,
        }
        values.update(overrides)
        return TaskConfig(**values)
    return _make


@pytest.fixture
def console_buffer():
    """Rich console writing into a StringIO, returned as (console, buffer)."""
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, no_color=True, width=200)
    return console, buffer
