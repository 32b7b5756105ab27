"""
List Algorithms CLI Command

Shows every supported hash algorithm with its aliases, digest size and default
encoding.
"""

import logging
import click
from rich.console import Console
from rich.table import Table
from models.hash_algorithm import DEFAULT_ALGORITHM, HashAlgorithm

logger = logging.getLogger(__name__)


@click.command("list-algorithms", help="List supported hash algorithms and their encodings.")
@click.pass_context
def list_algorithms(ctx: click.Context) -> None:
    """Print a table of supported algorithms."""
    console = Console()

    table = Table(title="Supported Algorithms", show_lines=False)
    table.add_column("Algorithm", style="bold cyan")
    table.add_column("Aliases", style="green", overflow="fold")
    table.add_column("Digest bytes", justify="right")
    table.add_column("Default encoding", style="magenta")

    for algorithm in HashAlgorithm:
        name = algorithm.value
        if algorithm is DEFAULT_ALGORITHM:
            name += " (default)"
        table.add_row(
            name,
            ", ".join(algorithm.aliases),
            str(algorithm.digest_size),
            algorithm.default_encoding.value,
        )

    console.print(table)
    console.print("Encodings: Hex, Base64, Base32 for all algorithms except CRC32, which only supports U32.")
