"""Launch the target service under the JaCoCo agent and stop it on demand.

Functions:
    build_agent_argument(coverage)       -> str
    build_service_command(config)        -> list[str]
    launch_service(config)               -> subprocess.Popen
    wait_for_stop_signal(stream)         -> None
    stop_service(process, timeout=None)  -> None
"""

import subprocess
import sys
from typing import TextIO

import click

from jacoco_launcher import process
from jacoco_launcher.config import Config, CoverageConfig

#: The agent's option grammar; field order and spelling are fixed by JaCoCo.
AGENT_ARGUMENT_TEMPLATE = (
    "-javaagent:{agent}=destfile={destfile},output=tcpserver,port={port},"
    "includes={includes},excludes={excludes}"
)


# ---------------------------------------------------------------------------
# Command construction
# ---------------------------------------------------------------------------

def build_agent_argument(coverage: CoverageConfig) -> str:
    """Return the ``-javaagent:`` option injecting JaCoCo into the service JVM.

    Empty include/exclude lists still produce their ``includes=`` and
    ``excludes=`` segments.
    """
    return AGENT_ARGUMENT_TEMPLATE.format(
        agent=coverage.agent_library_path,
        destfile=coverage.output_file,
        port=coverage.port,
        includes=",".join(coverage.include_patterns),
        excludes=",".join(coverage.exclude_patterns),
    )


def build_service_command(config: Config) -> list[str]:
    return ["java", build_agent_argument(config.coverage), "-jar", config.service.jar_path]


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def launch_service(config: Config) -> subprocess.Popen:
    """Print the service command line, then start it without waiting.

    Raises:
        ProcessLaunchError: if ``java`` cannot be started.
    """
    command = build_service_command(config)
    click.echo("Launching service:")
    click.echo(process.format_command(command))
    return process.start(command)


def wait_for_stop_signal(stream: TextIO | None = None) -> None:
    """Block until one line (or EOF) arrives on *stream*, stdin by default."""
    click.echo("Service running. Press ENTER to stop and generate report...")
    (stream or sys.stdin).readline()


def stop_service(service: subprocess.Popen, timeout: float | None = None) -> None:
    """Ask the service to terminate.

    With no *timeout* this returns at once without waiting for the process
    to exit, so the coverage file may still be written while the report is
    generated. With a *timeout* the call waits up to that many seconds and
    kills the service if it is still running.
    """
    service.terminate()
    if timeout is None:
        return

    try:
        service.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        click.echo(f"Service did not exit within {timeout:g}s, killing it.")
        service.kill()
        service.wait()
