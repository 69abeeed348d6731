"""
Centralized application-specific logging using Loguru.

This module provides function-based logging (`LOG` and `COMPLAIN`) that
dynamically respects the `beQuiet` and `noComplain` flags from application
settings.

Features:
- `LOG` for debug tracing of render calls.
- `COMPLAIN` for reporting template failures that are not raised to the caller.
- Consistent and customizable logging format.

Example:
    from subst.lib.log import LOG, COMPLAIN
    LOG("Rendering template")
    COMPLAIN("Unmatched '{' in template")

Environment:
- Set `SUBST_BEQUIET=True` to suppress debug output.
- Set `SUBST_NOCOMPLAIN=True` to suppress error reports.
"""

from loguru import logger
from typing import Any
import sys

# Create a distinct logger instance for the app
app_logger = logger.bind(app="SUBST")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Application-specific debug logging.

    Logs the message only if `appsettings.beQuiet` is false.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from subst.config.settings import appsettings  # Ensure up-to-date settings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)


def COMPLAIN(*args: Any, **kwargs: Any) -> None:
    """
    Report a failure that is not propagated to the caller.

    Logs at error level unless `appsettings.noComplain` is true.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from subst.config.settings import appsettings

    if not appsettings.noComplain:
        app_logger.opt(depth=1).error(*args, **kwargs)
