"""
Logging setup for the reservation manager.

Handlers are attached to the ``restaurant_reservations`` package logger
rather than the root logger, so an embedding program keeps control of
its own logging.  Records still propagate upwards.  Individual modules
can be made louder or quieter with ``MODULE_LOG_LEVELS``, e.g.
``services.booking_service=DEBUG,core.storage=WARNING``.
"""

import logging
from pathlib import Path
from typing import Dict

from .config import Settings


PACKAGE_LOGGER = "restaurant_reservations"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE_HANDLER = "reservations.console"
_FILE_HANDLER = "reservations.file"


def _level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def parse_module_levels(spec: str) -> Dict[str, int]:
    """Parse ``module=LEVEL`` pairs separated by commas.

    Module names are relative to ``restaurant_reservations.app`` unless
    they already start with the package name.  Malformed entries are
    skipped.
    """
    levels: Dict[str, int] = {}
    for item in spec.split(","):
        module, sep, level = item.partition("=")
        module = module.strip()
        if not sep or not module:
            continue
        if not module.startswith(PACKAGE_LOGGER):
            module = f"{PACKAGE_LOGGER}.app.{module}"
        levels[module] = _level(level)
    return levels


def setup_logging(settings: Settings) -> logging.Logger:
    """Configure the package logger from ``settings``.

    Levels are applied on every call; handlers are added only once, so
    building several apps in one process does not duplicate output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level(settings.log_level))
    for module, level in parse_module_levels(settings.module_log_levels).items():
        logging.getLogger(module).setLevel(level)

    names = {handler.get_name() for handler in logger.handlers}
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if settings.log_to_console and _CONSOLE_HANDLER not in names:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if settings.log_file and _FILE_HANDLER not in names:
        file_handler = logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
