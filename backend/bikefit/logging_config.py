"""Logging configuration for the bikefit namespace."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Attach handlers to the `bikefit` logger.

    Module loggers (`bikefit.geometry.calculator`, `bikefit.api.routes.search`, ...)
    propagate here. Calling it again replaces the handlers, since each
    `create_app()` call configures logging.

    Args:
        level: Level number or name, e.g. "DEBUG"
        log_file: Also append records to this file (`BIKEFIT_LOG_FILE`)
    """
    root = logging.getLogger("bikefit")
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.debug("Logging to %s", log_file or "stdout")
    return root
