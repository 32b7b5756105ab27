"""
Main entry point for the file hasher CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import importlib
import click
import logging
import rich_click as rclick
from utils.hasher_config import load_configuration
from utils.logging_config import setup_logging
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

@rclick.group()
@click.option('--logfile', '-l', type=click.Path(dir_okay=False, writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), default=None, help="Path to INI config file (default: ./config/filehasher_config.ini if present)")
@click.version_option(package_name="filehasher", prog_name="filehasher")
@click.pass_context
def filehasher_cli(ctx: click.Context, verbose: int, logfile: str, config_path: str) -> None:
    """
    File hasher for various algorithms. Hash files given as paths or glob patterns,
    or read paths from stdin when none are given.

    Args:
        ctx (click.Context): Click context for Click command group.
        verbose (int): Verbosity level (-v = INFO, -vv = DEBUG).
        logfile (str): Path to log file.
        config_path (str): Path to configuration file.

    Returns:
        None
    """
    # If the context object is already set (tests inject one), keep it
    if ctx.obj and "config" in ctx.obj:
        return

    if logfile and os.path.dirname(logfile):
        os.makedirs(os.path.dirname(logfile), exist_ok=True)

    setup_logging(verbosity=verbose, logfile=logfile)

    try:
        cfg = load_configuration(config_path)
        ctx.obj = {"config": cfg, "config_path": config_path}
    except ConfigurationError as e:
        logger.error(f"Configuration could not be loaded: {e}")
        ctx.obj = {"config": None, "config_path": config_path, "config_error": str(e)}


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.debug(f"Failed to import {module_name}: {e}")
            continue
        cli_function = getattr(module, command_name, None)
        if cli_function:
            filehasher_cli.add_command(cli_function)
        else:
            logger.debug(f"No command function found in {module_name}")

if __name__ == '__main__':
    filehasher_cli()
