"""Upload the coverage report to SonarQube with ``sonar-scanner``."""

import click

from jacoco_launcher import process
from jacoco_launcher.config import UploadConfig


def build_upload_command(upload: UploadConfig) -> list[str]:
    return [upload.scanner_executable_path, "-Dproject.settings=" + upload.project_properties_path]


def upload_report(upload: UploadConfig) -> bool:
    """Run the scanner when upload is enabled; return whether it ran.

    The scanner's exit code is not inspected.

    Raises:
        ProcessLaunchError: if the scanner executable cannot be started.
    """
    if not upload.enabled:
        return False

    click.echo("Uploading coverage to SonarQube...")
    process.run(build_upload_command(upload))
    click.echo("SonarQube upload complete.")
    return True
