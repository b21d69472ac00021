"""
Configuration management for the DevConnect CLI.

Sessions are kept per API URL, so you can be signed in to a local dev
server and a deployed one at the same time:

  ~/.devconnect/config.json
  {
    "default_url": "http://localhost:8000",
    "sessions": {
      "http://localhost:8000": {"token": "eyJ...", "email": "dev@example.com"}
    }
  }

The API URL is resolved from, in order: DEVCONNECT_API_URL, the --api-url
flag, default_url in the file, then http://localhost:8000.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
API_URL_ENV = "DEVCONNECT_API_URL"


class Config:
    """On-disk CLI settings and saved sessions."""

    def __init__(self, api_url_override: str | None = None, config_dir: Path | None = None):
        self.path = (config_dir or Path.home() / ".devconnect") / "config.json"
        self.api_url_override = api_url_override
        self.data: dict[str, Any] = self._read()

    def _read(self) -> dict[str, Any]:
        """Parse the config file. Missing or unreadable means empty."""
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            data = {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self.path, e)
            data = {}
        if not isinstance(data, dict):
            data = {}
        data.setdefault("sessions", {})
        return data

    def _write(self) -> None:
        """Persist the config, readable by the owner only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            json.dump(self.data, f, indent=2)
        # O_CREAT's mode only applies to new files
        self.path.chmod(0o600)

    @property
    def api_url(self) -> str:
        url = os.environ.get(API_URL_ENV) or self.api_url_override or self.data.get("default_url") or DEFAULT_API_URL
        return url.rstrip("/")

    @property
    def session(self) -> dict[str, Any]:
        """Saved session for the current API URL ({} when signed out)."""
        return self.data["sessions"].get(self.api_url, {})

    @property
    def token(self) -> str | None:
        return self.session.get("token")

    @property
    def email(self) -> str | None:
        return self.session.get("email")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def save_session(self, token: str, email: str) -> None:
        self.data["sessions"][self.api_url] = {"token": token, "email": email}
        self._write()

    def clear_session(self, url: str | None = None) -> None:
        """Forget the session for one API URL (the current one by default)."""
        if self.data["sessions"].pop((url or self.api_url).rstrip("/"), None) is not None:
            self._write()
