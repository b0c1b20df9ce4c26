"""Execution of route mutation commands."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

from .errors import CommandExecutionFailure

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    command: str
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner:
    """Run a command line without a shell and fail loudly on error.

    With ``dry_run`` enabled commands are only logged.
    """

    def __init__(self, dry_run: bool = False) -> None:
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def run(self, command: str) -> CommandResult:
        if self._dry_run:
            LOG.info("dry-run: would execute %s", command)
            return CommandResult(command=command, returncode=0)

        LOG.debug("Executing: %s", command)
        try:
            proc = subprocess.run(
                shlex.split(command), check=False, text=True, capture_output=True
            )
        except OSError as exc:
            raise CommandExecutionFailure(command, None, str(exc)) from exc

        if proc.returncode != 0:
            LOG.error("Failed to execute %s: %s", command, proc.stderr.strip())
            raise CommandExecutionFailure(command, proc.returncode, proc.stderr.strip())

        return CommandResult(
            command=command,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
