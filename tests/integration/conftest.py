"""Pytest configuration and fixtures for integration tests.

Provides a stand-in for the python-lokalise-api client module so the real
APIWrapper can be exercised without network access.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest


class RecordingLokaliseClient:
    """Mimics lokalise.Client for upload_file and download_files.

    Attributes:
        uploads: (project_id, params) of every upload_file call
        downloads: (project_id, params) of every download_files call
        failures: Exceptions raised by successive calls before succeeding
    """

    def __init__(self, token: str, **options: Any):
        self.token = token
        self.options = options
        self.uploads: List[tuple] = []
        self.downloads: List[tuple] = []
        self.failures: List[Exception] = []
        self.bundle_url: Optional[str] = None

    def _maybe_fail(self) -> None:
        if self.failures:
            raise self.failures.pop(0)

    def upload_file(self, project_id: str, params: Dict[str, Any]) -> SimpleNamespace:
        self.uploads.append((project_id, params))
        self._maybe_fail()
        return SimpleNamespace(
            process_id=f"process-{len(self.uploads)}",
            project_id=project_id.split(':')[0],
            status='queued',
        )

    def download_files(self, project_id: str, params: Dict[str, Any]) -> Dict[str, str]:
        self.downloads.append((project_id, params))
        self._maybe_fail()
        return {'project_id': project_id.split(':')[0], 'bundle_url': self.bundle_url}


@pytest.fixture
def lokalise_client(mocker):
    """Patch the lokalise module used by APIWrapper and return the client."""
    client = RecordingLokaliseClient('test-token')
    mock_lokalise = mocker.patch('src.lokalise_client.api_wrapper.lokalise')
    mock_lokalise.Client.return_value = client
    mock_lokalise.OAuthClient.return_value = client
    return client


@pytest.fixture
def no_sleep(mocker):
    """Make backoff waits instant and observable."""
    return mocker.patch('src.lokalise_client.retry_logic.time.sleep')
