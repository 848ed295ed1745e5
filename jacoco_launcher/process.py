"""External process helper shared by the service, report and upload steps.

Usage:
    proc = start(["java", "-jar", "service.jar"])   # returns immediately
    code = run(["sonar-scanner", "-Dproject.settings=sonar.properties"])

Child processes inherit the launcher's stdin, stdout and stderr; nothing is
captured or buffered here.
"""

import subprocess
from collections.abc import Sequence


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ProcessLaunchError(Exception):
    """Raised when an external command cannot be started at all."""


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def format_command(command: Sequence[str]) -> str:
    """Return *command* as a single space-joined line for display."""
    return " ".join(command)


def start(command: Sequence[str]) -> subprocess.Popen:
    """Spawn *command* with inherited standard streams and return its handle.

    Raises:
        ProcessLaunchError: the executable is missing or not runnable.
    """
    try:
        return subprocess.Popen(list(command))
    except OSError as exc:
        raise ProcessLaunchError(
            f"Unable to start '{command[0]}': {exc.strerror or exc}"
        ) from exc


def run(command: Sequence[str]) -> int:
    """Spawn *command*, block until it exits and return the exit code.

    Raises:
        ProcessLaunchError: the executable is missing or not runnable.
    """
    return start(command).wait()
