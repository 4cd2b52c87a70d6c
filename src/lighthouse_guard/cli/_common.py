"""Shared CLI helpers."""

from rich.console import Console

# soft_wrap keeps each CI log line on one physical line
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)
