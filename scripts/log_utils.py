# Logging initialization using loguru

import sys

from loguru import logger

from scripts.config import LOG_LEVEL

_initialized = False


def init_logging(level=None):
    """Route diagnostics to stderr. Safe to call on every Streamlit rerun."""
    global _initialized
    if _initialized:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level or LOG_LEVEL,
        backtrace=False,
        diagnose=False,
    )
    _initialized = True
