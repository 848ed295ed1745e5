"""CLI entry point — command definitions using Click.

Commands:
    init      Generate a template config file
    check     List required config fields that are empty
    run       Launch the service, wait for ENTER, report, upload
    report    Generate the JaCoCo report only
    upload    Upload to SonarQube only
"""

import sys

import click

from jacoco_launcher import __version__
from jacoco_launcher.config import DEFAULT_CONFIG_PATH


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _load_config(ctx: click.Context):
    """Load the config named by --config. ConfigError propagates."""
    from jacoco_launcher.config import load

    obj = ctx.obj
    _verbose(ctx, f"Loading config from '{obj['config_path']}'")
    return load(obj["config_path"])


def _verbose(ctx: click.Context, message: str) -> None:
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] {message}", err=True)


def _handle_errors(func):
    """Decorator that turns hard failures into a message and exit status 1."""
    import functools

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from jacoco_launcher.config import ConfigError
        from jacoco_launcher.process import ProcessLaunchError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except ProcessLaunchError as exc:
            click.echo(f"Launch error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to the configuration file.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="jacoco-launcher")
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool) -> None:
    """Run a Java service under JaCoCo, then report and upload coverage."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template jacoco-config.json file."""
    from jacoco_launcher.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your agent, service and report paths.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------

@cli.command("check")
@click.pass_context
@_handle_errors
def check_command(ctx: click.Context) -> None:
    """List required configuration fields that are empty."""
    config = _load_config(ctx)
    missing = config.missing_fields()
    if missing:
        click.echo("Missing configuration fields:", err=True)
        for name in missing:
            click.echo(f"  - {name}", err=True)
        sys.exit(1)
    click.echo(f"'{ctx.obj['config_path']}' is complete.")


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@cli.command("run")
@click.option("--stop-timeout", type=click.FloatRange(min=0), default=None,
              help="Seconds to wait for the service to exit after ENTER before "
                   "killing it. By default the launcher does not wait.")
@click.pass_context
@_handle_errors
def run_command(ctx: click.Context, stop_timeout: float | None) -> None:
    """Launch the service under JaCoCo, then report (and upload) on ENTER."""
    from jacoco_launcher.pipeline import run_pipeline

    config = _load_config(ctx)
    if stop_timeout is not None:
        _verbose(ctx, f"Waiting up to {stop_timeout:g}s for the service to stop")
    run_pipeline(config, stop_timeout=stop_timeout)


# ---------------------------------------------------------------------------
# report
# ---------------------------------------------------------------------------

@cli.command("report")
@click.pass_context
@_handle_errors
def report_command(ctx: click.Context) -> None:
    """Generate the JaCoCo report from an existing coverage data file."""
    from jacoco_launcher.steps.report import generate_report

    config = _load_config(ctx)
    _verbose(ctx, f"Coverage data file: {config.coverage.output_file}")
    generate_report(config.coverage)


# ---------------------------------------------------------------------------
# upload
# ---------------------------------------------------------------------------

@cli.command("upload")
@click.pass_context
@_handle_errors
def upload_command(ctx: click.Context) -> None:
    """Upload the coverage report to SonarQube (when sonar.enabled is true)."""
    from jacoco_launcher.steps.upload import upload_report

    config = _load_config(ctx)
    if not upload_report(config.upload):
        click.echo("SonarQube upload is disabled in the configuration, skipping.")
