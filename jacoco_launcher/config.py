"""Configuration loading and validation.

Usage:
    config = load("jacoco-config.json")     # raises ConfigError on bad config
    missing = config.missing_fields()       # ["service.jar", ...]
    generate_template("jacoco-config.json") # writes example file to disk
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = "jacoco-config.json"
DEFAULT_CLI_JAR = "target/jacococli.jar"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


class ConfigReadError(ConfigError):
    """Raised when the config file is missing or cannot be read."""


class ConfigParseError(ConfigError):
    """Raised when the config file is malformed or has the wrong shape."""


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CoverageConfig:
    agent_library_path: str = ""
    output_file: str = ""
    port: int = 0
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    class_directory: str = ""
    source_directory: str = ""
    report_directory: str = ""
    cli_jar_path: str = DEFAULT_CLI_JAR


@dataclass(frozen=True)
class ServiceConfig:
    jar_path: str = ""


@dataclass(frozen=True)
class UploadConfig:
    enabled: bool = False
    scanner_executable_path: str = ""
    project_properties_path: str = ""


@dataclass(frozen=True)
class Config:
    coverage: CoverageConfig
    service: ServiceConfig
    upload: UploadConfig = field(default_factory=UploadConfig)

    def missing_fields(self) -> list[str]:
        """Return the dotted names of required fields that are empty.

        Only presence is checked: a path that points nowhere is still
        considered present.
        """
        required = {
            "jacoco.agentJar": self.coverage.agent_library_path,
            "jacoco.destFile": self.coverage.output_file,
            "jacoco.classDir": self.coverage.class_directory,
            "jacoco.sourceDir": self.coverage.source_directory,
            "jacoco.reportDir": self.coverage.report_directory,
            "service.jar": self.service.jar_path,
        }
        if self.upload.enabled:
            required["sonar.scannerPath"] = self.upload.scanner_executable_path
            required["sonar.projectProperties"] = self.upload.project_properties_path

        missing = [name for name, value in required.items() if not value]
        if self.coverage.port <= 0:
            missing.append("jacoco.port")
        return missing


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from a JSON (or YAML) file.

    The environment variable SONAR_SCANNER_PATH overrides ``sonar.scannerPath``.

    Fields absent from a section fall back to empty values; use
    :meth:`Config.missing_fields` to find them.

    Raises:
        ConfigReadError:  if the file is missing or unreadable.
        ConfigParseError: if the file is malformed, a section is missing,
                          or a field has the wrong type.
    """
    path = Path(config_path)

    if not path.is_file():
        raise ConfigReadError(
            f"Config file not found: '{config_path}'\n"
            "Run `jacoco-launcher init` to generate a template."
        )

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Unable to read '{config_path}': {exc}") from exc

    raw = _parse(text, path)
    if not isinstance(raw, dict):
        raise ConfigParseError(f"'{config_path}' must contain an object at the top level.")

    try:
        coverage = _decode_coverage(_section(raw, "jacoco", required=True))
        service = ServiceConfig(jar_path=_string(_section(raw, "service", required=True), "jar", "service"))
        upload = _decode_upload(_section(raw, "sonar", required=False))
    except ConfigParseError as exc:
        raise ConfigParseError(f"Invalid configuration in '{config_path}': {exc}") from exc

    return Config(coverage=coverage, service=service, upload=upload)


def _parse(text: str, path: Path) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigParseError(f"Failed to parse '{path}': {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"Failed to parse '{path}': {exc}") from exc


def _decode_coverage(section: dict) -> CoverageConfig:
    return CoverageConfig(
        agent_library_path=_string(section, "agentJar", "jacoco"),
        output_file=_string(section, "destFile", "jacoco"),
        port=_integer(section, "port", "jacoco"),
        include_patterns=_string_list(section, "includes", "jacoco"),
        exclude_patterns=_string_list(section, "excludes", "jacoco"),
        class_directory=_string(section, "classDir", "jacoco"),
        source_directory=_string(section, "sourceDir", "jacoco"),
        report_directory=_string(section, "reportDir", "jacoco"),
        cli_jar_path=_string(section, "cliJar", "jacoco") or DEFAULT_CLI_JAR,
    )


def _decode_upload(section: dict) -> UploadConfig:
    enabled = section.get("enabled", False)
    if enabled is None:
        enabled = False
    if not isinstance(enabled, bool):
        raise ConfigParseError("'sonar.enabled' must be true or false")

    scanner = os.environ.get("SONAR_SCANNER_PATH") or _string(section, "scannerPath", "sonar")
    return UploadConfig(
        enabled=enabled,
        scanner_executable_path=scanner,
        project_properties_path=_string(section, "projectProperties", "sonar"),
    )


# ---------------------------------------------------------------------------
# Field decoders
# ---------------------------------------------------------------------------

def _section(raw: dict, name: str, *, required: bool) -> dict:
    section = raw.get(name)
    if section is None:
        if required:
            raise ConfigParseError(f"'{name}' section is missing")
        return {}
    if not isinstance(section, dict):
        raise ConfigParseError(f"'{name}' must be an object")
    return section


def _string(section: dict, key: str, prefix: str) -> str:
    value = section.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigParseError(f"'{prefix}.{key}' must be a string")
    return value


def _integer(section: dict, key: str, prefix: str) -> int:
    value = section.get(key)
    if value is None:
        return 0
    # bool is a subclass of int; `"port": true` is still a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigParseError(f"'{prefix}.{key}' must be an integer")
    return value


def _string_list(section: dict, key: str, prefix: str) -> tuple[str, ...]:
    value = section.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigParseError(f"'{prefix}.{key}' must be a list of strings")
    return tuple(value)


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
{
  "jacoco": {
    "agentJar": "lib/jacocoagent.jar",
    "destFile": "target/jacoco.exec",
    "port": 6300,
    "includes": ["com/example/*"],
    "excludes": [],
    "classDir": "target/classes",
    "sourceDir": "src/main/java",
    "reportDir": "target/jacoco-report",
    "cliJar": "target/jacococli.jar"
  },
  "service": {
    "jar": "target/my-service.jar"
  },
  "sonar": {
    "enabled": false,
    "scannerPath": "/opt/sonar-scanner/bin/sonar-scanner",
    "projectProperties": "sonar-project.properties"
  }
}
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template jacoco-config.json to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
