"""
Logging for Lighthouse Guard.

Log records go to stderr through rich, so stdout stays reserved for the
report (or its JSON form). ``--log-file`` adds a plain-text copy that CI jobs
can keep as an artifact next to the metrics log.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import ConfigurationError

ROOT_LOGGER = "lighthouse_guard"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def log_level(verbose: bool = False, quiet: bool = False) -> int:
    """INFO by default; quiet wins over verbose."""
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.INFO


def _console_handler(verbose: bool) -> logging.Handler:
    # URLs and paths in messages must not be read as rich markup
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )


def _file_handler(log_file: Path) -> logging.Handler:
    try:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot open log file {log_file}: {e}")
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    # The file keeps DEBUG detail regardless of the console level
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Install handlers on the ``lighthouse_guard`` logger.

    Repeated calls replace the handlers from the previous call, so a process
    running several checks does not duplicate output.

    Raises:
        ConfigurationError: If ``log_file`` cannot be opened
    """
    handlers: List[logging.Handler] = [_console_handler(verbose)]
    handlers[0].setLevel(log_level(verbose, quiet))
    if log_file is not None:
        handlers.append(_file_handler(Path(log_file)))

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if log_file is not None else log_level(verbose, quiet))
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger namespaced under ``lighthouse_guard`` (``loader`` -> ``lighthouse_guard.loader``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
