"""Credential loading, merging and persistence.

Credentials come from three places, in increasing order of precedence:

1. ``CONFLUENCE_URL``, ``CONFLUENCE_USER`` and ``CONFLUENCE_API_TOKEN`` in the
   environment (a ``.env`` file is loaded with python-dotenv),
2. the JSON credentials file (``{"baseUrl", "username", "apiToken"}``),
3. explicit command-line values.

The credentials file is stored in plain text. It is meant for a local
developer machine only.
"""

import json
import logging
import os
from pathlib import Path
from typing import NamedTuple, Optional, Union

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str = ""
    user: str = ""
    api_token: str = ""

    def is_valid(self) -> bool:
        """Return True when url, user and api_token are all non-blank."""
        return all(value and value.strip() for value in (self.url, self.user, self.api_token))

    def override_with(
        self,
        url: Optional[str] = None,
        user: Optional[str] = None,
        api_token: Optional[str] = None,
    ) -> "Credentials":
        """Return a copy where every non-blank argument replaces the stored value."""
        return Credentials(
            url=url if url and url.strip() else self.url,
            user=user if user and user.strip() else self.user,
            api_token=api_token if api_token and api_token.strip() else self.api_token,
        )

    def to_file_dict(self) -> dict:
        return {
            "baseUrl": self.url,
            "username": self.user,
            "apiToken": self.api_token,
        }


class CredentialStore:
    """Reads and writes the JSON credentials file.

    Neither operation is fatal: a missing or broken file yields empty
    credentials, and a failed save is only logged. The caller decides whether
    the merged result is usable.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger

    def load(self, file_path: PathLike) -> Credentials:
        """Load credentials from ``file_path``.

        Args:
            file_path: Path to the JSON credentials file

        Returns:
            Credentials read from the file, or empty Credentials if the file
            is missing or cannot be parsed
        """
        path = Path(file_path)
        if not path.exists():
            self._log.info(f"Credentials file not found: {path}")
            return Credentials()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self._log.warning(f"Failed to load credentials file: {e}")
            return Credentials()

        if not isinstance(data, dict):
            self._log.warning(
                f"Failed to load credentials file: expected a JSON object, "
                f"got {type(data).__name__}"
            )
            return Credentials()

        return Credentials(
            url=str(data.get("baseUrl") or ""),
            user=str(data.get("username") or ""),
            api_token=str(data.get("apiToken") or ""),
        )

    def save(self, file_path: PathLike, credentials: Credentials) -> bool:
        """Write ``credentials`` to ``file_path`` as indented JSON.

        Returns:
            True if the file was written, False if writing failed
        """
        path = Path(file_path)
        try:
            if path.parent and not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(credentials.to_file_dict(), f, indent=2)
                f.write("\n")
        except OSError as e:
            self._log.warning(f"Failed to save credentials file: {e}")
            return False

        self._log.info(f"Saved credentials to {path}")
        return True


class Authenticator:
    """Resolves the effective credentials for a publish run.

    Example:
        >>> auth = Authenticator("credentials.json")
        >>> creds = auth.get_credentials(base_url="https://example.atlassian.net/wiki")
        >>> creds.is_valid()
        True
    """

    def __init__(
        self,
        credentials_file: PathLike = "credentials.json",
        store: Optional[CredentialStore] = None,
        use_environment: bool = True,
    ):
        """Initialize the authenticator.

        Args:
            credentials_file: Path to the JSON credentials file
            store: Optional CredentialStore (a default one is created)
            use_environment: Whether to fall back to CONFLUENCE_* variables
        """
        self.credentials_file = Path(credentials_file)
        self._store = store or CredentialStore()
        self._use_environment = use_environment
        if use_environment:
            load_dotenv()

    def get_credentials(
        self,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        api_token: Optional[str] = None,
    ) -> Credentials:
        """Merge environment, file and explicit values into one Credentials.

        Returns:
            Merged Credentials (possibly incomplete; check ``is_valid()``)
        """
        merged = self._from_environment()
        file_creds = self._store.load(self.credentials_file)
        merged = merged.override_with(file_creds.url, file_creds.user, file_creds.api_token)
        return merged.override_with(base_url, username, api_token)

    def save(self, credentials: Credentials) -> bool:
        """Persist ``credentials`` back to the configured credentials file."""
        return self._store.save(self.credentials_file, credentials)

    def _from_environment(self) -> Credentials:
        if not self._use_environment:
            return Credentials()
        return Credentials(
            url=os.getenv("CONFLUENCE_URL") or "",
            user=os.getenv("CONFLUENCE_USER") or "",
            api_token=os.getenv("CONFLUENCE_API_TOKEN") or "",
        )
