"""Shared fixtures: a fake process launcher and config-file helpers."""

import json
import subprocess
from pathlib import Path

import pytest

from jacoco_launcher import process


class FakeProcess:
    """Stand-in for subprocess.Popen that never starts anything."""

    def __init__(self, command: list[str], exit_code: int = 0, hangs: bool = False) -> None:
        self.command = command
        self.exit_code = exit_code
        self.hangs = hangs
        self.terminated = False
        self.killed = False
        self.wait_calls: list[float | None] = []

    def terminate(self) -> None:
        self.terminated = True

    def kill(self) -> None:
        self.killed = True

    def wait(self, timeout: float | None = None) -> int:
        self.wait_calls.append(timeout)
        if self.hangs and not self.killed:
            raise subprocess.TimeoutExpired(self.command, timeout)
        return self.exit_code


class FakeLauncher:
    """Records every command passed to process.start()."""

    def __init__(self) -> None:
        self.started: list[FakeProcess] = []
        self.exit_codes: dict[str, int] = {}
        self.missing: set[str] = set()

    def __call__(self, command) -> FakeProcess:
        command = list(command)
        if command[0] in self.missing:
            raise process.ProcessLaunchError(f"Unable to start '{command[0]}': not found")
        # exit_codes keys: "report" for the JaCoCo CLI, else the executable
        key = command[3] if command[:2] == ["java", "-jar"] else command[0]
        proc = FakeProcess(command, exit_code=self.exit_codes.get(key, 0))
        self.started.append(proc)
        return proc

    @property
    def commands(self) -> list[list[str]]:
        return [p.command for p in self.started]


@pytest.fixture
def launcher(monkeypatch) -> FakeLauncher:
    fake = FakeLauncher()
    monkeypatch.setattr(process, "start", fake)
    return fake


@pytest.fixture
def config_data(tmp_path: Path) -> dict:
    """A complete config dict with upload disabled and reportDir under tmp_path."""
    return {
        "jacoco": {
            "agentJar": "lib/jacocoagent.jar",
            "destFile": "target/jacoco.exec",
            "port": 6300,
            "includes": ["com/example/*"],
            "excludes": [],
            "classDir": "target/classes",
            "sourceDir": "src/main/java",
            "reportDir": str(tmp_path / "reports"),
        },
        "service": {"jar": "target/service.jar"},
        "sonar": {
            "enabled": False,
            "scannerPath": "/opt/sonar-scanner/bin/sonar-scanner",
            "projectProperties": "sonar-project.properties",
        },
    }


@pytest.fixture
def write_config(tmp_path: Path):
    """Return a function that writes a config dict to tmp_path as JSON."""
    def _write(data: dict, name: str = "jacoco-config.json") -> Path:
        p = tmp_path / name
        p.write_text(json.dumps(data), encoding="utf-8")
        return p
    return _write
