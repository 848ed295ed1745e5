"""Top-level driver: launch → stop signal → report → upload.

Usage:
    config = load("jacoco-config.json")
    run_pipeline(config)                    # blocks on stdin for the stop signal

Nothing here catches errors: a config or launch failure ends the run.
"""

from typing import TextIO

from jacoco_launcher.config import Config
from jacoco_launcher.steps.report import generate_report
from jacoco_launcher.steps.service import launch_service, stop_service, wait_for_stop_signal
from jacoco_launcher.steps.upload import upload_report


def run_pipeline(
    config: Config,
    stdin: TextIO | None = None,
    stop_timeout: float | None = None,
) -> None:
    service = launch_service(config)
    wait_for_stop_signal(stdin)
    stop_service(service, timeout=stop_timeout)

    generate_report(config.coverage)
    upload_report(config.upload)
