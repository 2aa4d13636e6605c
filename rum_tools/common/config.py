"""Shared configuration.

Handles Datadog credentials, the optional .env file and output paths.
"""

import os
from pathlib import Path
from typing import Optional

from datadog_api_client import Configuration


# Project root and data paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
ENV_PATH = PROJECT_ROOT / ".env"
DEFAULT_SUBDIR = "datadog"

DEFAULT_SITE = "datadoghq.com"


def load_env(env_path: Optional[Path] = None) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.
    """
    env_path = env_path or ENV_PATH
    if not env_path.exists():
        return

    with open(env_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or '=' not in line:
                continue
            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()
            # Strip quotes from value if present
            if len(value) >= 2 and value[0] in ['"', "'"] and value[-1] == value[0]:
                value = value[1:-1]
            if key not in os.environ:
                os.environ[key] = value


def get_credentials() -> dict:
    """Read Datadog credentials and site from the environment."""
    load_env()

    api_key = os.getenv("DD_API_KEY")
    app_key = os.getenv("DD_APP_KEY")
    dd_site = os.getenv("DD_SITE", DEFAULT_SITE)

    if not api_key or not app_key:
        raise ValueError(
            "Missing Datadog credentials. Set DD_API_KEY and DD_APP_KEY environment variables.\n"
            "Create API and App keys at: https://app.datadoghq.com/organization-settings/api-keys"
        )

    return {"api_key": api_key, "app_key": app_key, "site": dd_site}


def get_api_config() -> Configuration:
    """Build a Datadog API client configuration from the environment."""
    credentials = get_credentials()
    configuration = Configuration()
    configuration.api_key["apiKeyAuth"] = credentials["api_key"]
    configuration.api_key["appKeyAuth"] = credentials["app_key"]
    configuration.server_variables["site"] = credentials["site"]
    return configuration


def get_output_path(output_file: str, working_folder: Optional[str] = None) -> Path:
    """Resolve where an output file goes.

    data/{working_folder}/datadog/{output_file}, or data/datadog/{output_file}
    when no working folder is given.
    """
    if working_folder:
        output_path = DATA_DIR / working_folder / DEFAULT_SUBDIR / output_file
    else:
        output_path = DATA_DIR / DEFAULT_SUBDIR / output_file

    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path
