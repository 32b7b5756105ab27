"""
CLI command to validate the configuration file and environment overrides without hashing anything.
"""
import click
import logging
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from utils.cli_helpers import display_configuration_error
from utils.config.config_normalizer import ConfigNormalizer
from utils.errors import ConfigurationError
from utils.hasher_config import build_run_configuration

logger = logging.getLogger(__name__)


@click.command("config-check", help="Validate the configuration and show the effective settings.")
@click.pass_context
def config_check(ctx: click.Context) -> None:
    """
    Build the run configuration from the config file and environment and print it.

    Exits with 2 when the configuration is invalid.
    """
    obj = ctx.obj or {}
    if obj.get("config_error"):
        display_configuration_error(obj["config_error"])
        ctx.exit(2)

    try:
        config = build_run_configuration(obj.get("config"))
    except ConfigurationError as e:
        display_configuration_error(str(e))
        ctx.exit(2)

    console = Console()
    table = Table(title="Effective Configuration")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value", style="green")
    for key, value in config.model_dump(exclude={"supplied_paths"}).items():
        table.add_row(key, str(getattr(value, "value", value)))
    console.print(table)

    env_table = Table(title="Environment Overrides")
    env_table.add_column("Variable", style="bold cyan")
    env_table.add_column("Target", style="yellow")
    for env_var, (section, key) in sorted(ConfigNormalizer().get_supported_env_vars().items()):
        env_table.add_row(env_var, escape(f"[{section}] {key}"))
    console.print(env_table)

    click.secho("✓ Configuration is valid", fg="green")
