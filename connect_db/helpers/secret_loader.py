"""Load per-database secret files from the secrets directory.

Each database ``<name>`` has two JSON files:

    <secrets-dir>/<name>.db.json       {"data": {"db_url": "<template>"}}
    <secrets-dir>/<name>.db-role.json  {"username": "...", "password": "..."}

Files are re-read on every call; nothing is cached.
"""

from pathlib import Path
from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from connect_db.core.config import settings
from connect_db.core.errors import ConfigParseError, ConfigReadError
from connect_db.schemas.secrets import DatabaseConfig, DatabaseCredentials

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

CONFIG_SUFFIX = ".db.json"
CREDENTIALS_SUFFIX = ".db-role.json"


def secret_paths(database_name: str, secrets_dir: Path) -> tuple[Path, Path]:
    """
    Compute the config and credentials file paths for a database.

    Pure function. The name is used verbatim, with no sanitization.

    Args:
        database_name: Database name from the command line
        secrets_dir: Directory holding the secret files

    Returns:
        Tuple of (config_path, credentials_path)
    """
    return (
        secrets_dir / f"{database_name}{CONFIG_SUFFIX}",
        secrets_dir / f"{database_name}{CREDENTIALS_SUFFIX}",
    )


def read_secret_file(path: Path, *, kind: str) -> str:
    """
    Read a secret file fully into memory.

    Raises:
        ConfigReadError: If the file is missing, unreadable, a directory, or not UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigReadError(path, e.strerror or str(e), kind=kind) from e
    except UnicodeDecodeError as e:
        raise ConfigReadError(path, "file is not valid UTF-8", kind=kind) from e


def _describe_validation_error(error: ValidationError) -> str:
    """Summarize a validation error without echoing input values."""
    details = []
    for item in error.errors(include_url=False, include_input=False):
        location = ".".join(str(part) for part in item["loc"])
        details.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(details)


def parse_secret_file(content: str, model: type[ModelT], path: Path, *, kind: str) -> ModelT:
    """
    Parse and validate JSON content into a schema model.

    Raises:
        ConfigParseError: If content is not valid JSON or does not match the model
    """
    try:
        return model.model_validate_json(content)
    except ValidationError as e:
        raise ConfigParseError(path, _describe_validation_error(e), kind=kind) from e


def load_database_secrets(
    database_name: str, secrets_dir: Path | None = None
) -> tuple[DatabaseConfig, DatabaseCredentials]:
    """
    Load the connection config and credentials for a database.

    Both files are read before either is parsed.

    Args:
        database_name: Database name (matches <secrets-dir>/<name>.* files)
        secrets_dir: Secrets directory (defaults to settings.SECRETS_DIR)

    Returns:
        Tuple of (DatabaseConfig, DatabaseCredentials)

    Raises:
        ConfigReadError: If either file cannot be read
        ConfigParseError: If either file is malformed
    """
    config_path, creds_path = secret_paths(database_name, secrets_dir or settings.SECRETS_DIR)

    config_content = read_secret_file(config_path, kind="config")
    creds_content = read_secret_file(creds_path, kind="credentials")

    config = parse_secret_file(config_content, DatabaseConfig, config_path, kind="config")
    credentials = parse_secret_file(creds_content, DatabaseCredentials, creds_path, kind="credentials")

    logger.debug("secrets_loaded", config_path=str(config_path), credentials_path=str(creds_path))
    return config, credentials
