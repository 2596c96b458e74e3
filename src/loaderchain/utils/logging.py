"""Logging configuration with Rich formatting.

Resolver steps log one line per tier; the diagnostic record of the
provider involved is embedded as JSON so it can be grepped or parsed.
"""

import logging
import sys
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_KEYWORDS = ["provider", "resource", "type", "not found", "found"]


def setup_logging(
    level: int = logging.INFO,
    show_path: bool = False,
    show_time: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Configure the root logger with a Rich handler.

    Args:
        level: Logging level (default: INFO).
        show_path: Show file path in log messages (default: False).
        show_time: Show timestamp in log messages (default: True).
        console: Optional Rich Console instance (default: stderr console).
    """
    if console is None:
        console = Console(stderr=True)

    handler = RichHandler(
        console=console,
        show_path=show_path,
        show_time=show_time,
        rich_tracebacks=True,
        markup=False,
        show_level=True,
        level=level,
        omit_repeated_times=False,
        keywords=_KEYWORDS,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def configure_module_logger(
    module_name: str,
    level: int = logging.INFO,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Configure a module-specific logger.

    Args:
        module_name: Module name (typically __name__).
        level: Logging level.
        use_colors: Use a Rich handler; otherwise a plain stderr handler.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(level)
    logger.handlers.clear()

    handler: Union[RichHandler, logging.Handler]
    if use_colors:
        console = Console(stderr=True)
        handler = RichHandler(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            markup=False,
            show_level=True,
            level=logging.NOTSET,
            omit_repeated_times=False,
            keywords=_KEYWORDS,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def reconfigure_package_loggers(level: int, use_colors: bool = True) -> None:
    """Re-apply level and handler style to every ``loaderchain.*`` logger."""
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("loaderchain."):
            configure_module_logger(name, level=level, use_colors=use_colors)
