"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="lighthouse-guard",
    help="Lighthouse Guard - Lighthouse score regression checks for Speedlify runs",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .check import check as _check  # noqa: F401, E402
from .history import history as _history  # noqa: F401, E402
