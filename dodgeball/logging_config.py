"""Logging setup for the command-line entry points.

Library modules only create module-level loggers; configuring handlers is
left to whichever program embeds the engine.
"""

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV_VAR = "DODGEBALL_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def resolve_level(level: Optional[Union[str, int]] = None) -> int:
    """Turn a level name/number (or the environment override) into an int.

    Precedence: explicit ``level``, then ``DODGEBALL_LOG_LEVEL``, then INFO.
    Unknown names fall back to INFO.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[Union[str, int]] = None) -> int:
    """Configure root logging once for a CLI run.

    Returns:
        The numeric level that was applied
    """
    numeric = resolve_level(level)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric
