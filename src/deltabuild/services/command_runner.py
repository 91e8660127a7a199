"""Subprocess execution service for deltabuild."""

import subprocess
from typing import List, Optional

from deltabuild.constants import (
    EXIT_COMMAND_NOT_EXECUTABLE,
    EXIT_COMMAND_NOT_FOUND,
    EXIT_COMMAND_TIMEOUT,
)
from deltabuild.errors import BuildError
from deltabuild.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands one at a time and maps failures to BuildError.

    Output is never captured; docker and make write straight to the terminal.
    """

    def __init__(self, logger, default_timeout: Optional[float] = None):
        self.logger = logger
        self.default_timeout = default_timeout

    def run(self, cmd: List[str], cwd: Optional[str] = None) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(cmd, text=True, timeout=self.default_timeout, cwd=cwd)
        except FileNotFoundError as exc:
            raise BuildError(
                actionable_error("command_not_found", command=cmd[0]),
                returncode=EXIT_COMMAND_NOT_FOUND,
            ) from exc
        except PermissionError as exc:
            raise BuildError(
                actionable_error("command_not_executable", command=cmd[0]),
                returncode=EXIT_COMMAND_NOT_EXECUTABLE,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise BuildError(
                actionable_error("command_timeout", timeout=self.default_timeout, command=cmd_str),
                returncode=EXIT_COMMAND_TIMEOUT,
            ) from exc
        except Exception as exc:
            raise BuildError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if result.returncode != 0:
            raise BuildError(
                actionable_error("command_failed", returncode=result.returncode, command=cmd_str),
                returncode=result.returncode,
            )

        return result
