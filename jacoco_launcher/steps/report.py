"""Generate the JaCoCo HTML and XML reports with the JaCoCo CLI.

Functions:
    build_report_command(coverage)  -> list[str]
    generate_report(coverage)       -> int | None

A failing report never aborts the run: directory errors and non-zero CLI
exit codes are printed and the caller carries on.
"""

from pathlib import Path

import click

from jacoco_launcher import process
from jacoco_launcher.config import CoverageConfig

XML_REPORT_NAME = "jacoco-report.xml"


def build_report_command(coverage: CoverageConfig) -> list[str]:
    report_dir = coverage.report_directory
    return [
        "java",
        "-jar", coverage.cli_jar_path,
        "report", coverage.output_file,
        "--classfiles", coverage.class_directory,
        "--sourcefiles", coverage.source_directory,
        "--html", report_dir + "/html",
        "--xml", report_dir + "/" + XML_REPORT_NAME,
    ]


def generate_report(coverage: CoverageConfig) -> int | None:
    """Run ``jacococli.jar report`` against the agent's coverage data file.

    Returns the CLI exit code, or ``None`` when the report directory could not
    be created and the CLI was therefore not run.

    Raises:
        ProcessLaunchError: if ``java`` cannot be started.
    """
    click.echo("Generating JaCoCo report...")

    report_dir = Path(coverage.report_directory)
    try:
        report_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        click.echo(f"Failed to create report directory: {report_dir.absolute()}")
        return None

    command = build_report_command(coverage)
    click.echo(f"Running: {process.format_command(command)}")
    exit_code = process.run(command)

    if exit_code == 0:
        click.echo(f"JaCoCo report generated at: {coverage.report_directory}")
    else:
        click.echo(f"JaCoCo CLI failed with exit code: {exit_code}")
    return exit_code
