"""Hand the process over to psql.

The launcher replaces the current process image with the client binary
(``os.execvpe``); on success nothing after the exec runs. The password is
passed through ``PGPASSWORD`` in the child's environment only, never on the
command line and never in this process's ``os.environ``.
"""

import os
import sys
from collections.abc import Mapping
from typing import NoReturn, Protocol

import structlog

from connect_db.core.config import settings
from connect_db.core.errors import ExecError
from connect_db.schemas.secrets import ConnectionParams

logger = structlog.get_logger(__name__)

PASSWORD_ENV_VAR = "PGPASSWORD"


class ExecFunction(Protocol):
    """Protocol for exec implementations to enable testing."""

    def __call__(self, file: str, args: list[str], env: Mapping[str, str], /) -> NoReturn:
        """Replace the current process with ``file``."""
        ...


def build_psql_args(params: ConnectionParams, binary: str = "psql") -> list[str]:
    """
    Build the client argument vector.

    Pure function. argv[0] is the binary name.

    Args:
        params: Connection parameters
        binary: Client binary name or path

    Returns:
        Argument list: binary -h host -p port -U username -d database
    """
    return [
        binary,
        "-h",
        params.host,
        "-p",
        params.port,
        "-U",
        params.username,
        "-d",
        params.database,
    ]


def build_psql_env(params: ConnectionParams, base_env: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Build the client environment: a copy of ``base_env`` plus PGPASSWORD.

    Args:
        params: Connection parameters
        base_env: Environment to copy (defaults to os.environ)

    Returns:
        New environment mapping; ``base_env`` is left untouched
    """
    env = dict(os.environ if base_env is None else base_env)
    env[PASSWORD_ENV_VAR] = params.password
    return env


class PsqlLauncher:
    """Replaces the current process with psql connected to a database."""

    def __init__(self, binary: str | None = None, exec_fn: ExecFunction | None = None) -> None:
        """Initialize launcher.

        Args:
            binary: Client binary (defaults to settings.PSQL_BINARY), resolved via PATH
            exec_fn: Exec implementation (defaults to os.execvpe)
        """
        self.binary = binary or settings.PSQL_BINARY
        self.exec_fn: ExecFunction = exec_fn or os.execvpe

    def launch(self, params: ConnectionParams) -> NoReturn:
        """
        Exec the client. Never returns on success.

        Raises:
            ExecError: If the binary cannot be found or executed
        """
        args = build_psql_args(params, self.binary)
        env = build_psql_env(params)

        logger.info(
            "launching_client",
            binary=self.binary,
            host=params.host,
            port=params.port,
            database=params.database,
            username=params.username,
        )

        # exec discards Python's unflushed buffers
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            self.exec_fn(self.binary, args, env)
        except OSError as e:
            logger.debug("exec_failed", binary=self.binary, error=str(e))
            raise ExecError(self.binary, e) from e

        # Only reachable with an exec_fn that returns
        msg = f"{self.binary} exec returned unexpectedly"
        raise ExecError(self.binary, OSError(msg))
