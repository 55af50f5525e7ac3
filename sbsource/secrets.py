"""Secrets management for application configuration."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

DEFAULT_API_URL = "https://smilebasicsource.com/api/"


class Secrets(BaseModel):
    """Manages the API location and credentials.

    :ivar api_url: Base URL of the SmileBASIC Source API, ending with a slash.
    :ivar auth_token: Optional token used for authorized API requests.
    """

    api_url: str = DEFAULT_API_URL
    auth_token: Optional[str] = None

    @field_validator("api_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        # Endpoints are appended directly to the base URL.
        return value if value.endswith("/") else f"{value}/"

    @classmethod
    def load(
        cls,
        cli_api_url: Optional[str] = None,
        cli_auth_token: Optional[str] = None,
        secrets_file: Path = Path(".secrets.json"),
    ) -> "Secrets":
        """Load secrets from CLI, .secrets.json, or environment variables.

        Each value is taken from the first source that provides it.

        :param cli_api_url: Optional API URL provided via command line.
        :type cli_api_url: Optional[str]
        :param cli_auth_token: Optional auth token provided via command line.
        :type cli_auth_token: Optional[str]
        :param secrets_file: Path of the JSON secrets file.
        :type secrets_file: Path
        :return: Secrets instance with loaded configuration.
        :rtype: Secrets
        """
        file_data = {}
        if secrets_file.exists():
            try:
                file_data = json.loads(secrets_file.read_text())
            except json.JSONDecodeError:
                print(f"Warning: Could not parse {secrets_file}, ignoring it.")

        api_url = (
            cli_api_url
            or file_data.get("api_url")
            or os.environ.get("SBS_API_URL")
            or DEFAULT_API_URL
        )
        auth_token = (
            cli_auth_token
            or file_data.get("auth_token")
            or os.environ.get("SBS_AUTH_TOKEN")
        )
        return cls(api_url=api_url, auth_token=auth_token)
