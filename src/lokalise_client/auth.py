"""Authentication module for loading Lokalise credentials.

This module loads the Lokalise API token and project ID from environment
variables using python-dotenv. Presence is not enforced here: the sync
tasks validate the credentials and fail fast before doing any I/O.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv


class Credentials(NamedTuple):
    """Lokalise API credentials."""
    api_token: Optional[str]
    project_id: Optional[str]
    branch: Optional[str] = None


class Authenticator:
    """Loads Lokalise credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Environment variables:
        LOKALISE_API_TOKEN: Lokalise API token (or OAuth2 token)
        LOKALISE_PROJECT_ID: Lokalise project ID
        LOKALISE_BRANCH: Optional branch name

    Example:
        >>> creds = Authenticator().get_credentials()
        >>> creds.project_id
        '123.abc'
    """

    def __init__(self):
        """Initialize the authenticator by loading variables from a .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Lokalise credentials from environment variables.

        Empty values are reported as None.

        Returns:
            Credentials: api_token, project_id and branch
        """
        return Credentials(
            api_token=os.getenv('LOKALISE_API_TOKEN') or None,
            project_id=os.getenv('LOKALISE_PROJECT_ID') or None,
            branch=os.getenv('LOKALISE_BRANCH') or None,
        )
