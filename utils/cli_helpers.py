#!/usr/bin/env python3
"""
CLI helper utilities for consistent error handling and context access.
"""

import click
from rich.console import Console
from typing import Any, Dict, Optional

console = Console(stderr=True)


def get_file_config(ctx: click.Context) -> Optional[Dict[str, Dict[str, Any]]]:
    """
    Return the loaded INI configuration from the context.

    Raises:
        click.UsageError: If the configuration failed to load.
    """
    if not ctx.obj:
        return None
    if ctx.obj.get("config_error"):
        raise click.UsageError(f"Configuration error: {ctx.obj['config_error']}", ctx=ctx)
    return ctx.obj.get("config")


def display_configuration_error(error_message: str) -> None:
    """
    Display a configuration error with a pointer to the commands that help fix it.

    Args:
        error_message: The error message to display
    """
    console.print(f"❌ Configuration Error: {error_message}", style="red", markup=False, highlight=False)
    console.print("💡 Run 'filehasher list-algorithms' to see supported algorithms and encodings", style="yellow")
    console.print("💡 Run 'filehasher config-check' to inspect the effective configuration", style="yellow")
