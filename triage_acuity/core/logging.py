"""Logging helpers for triage acuity scoring."""
from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure global logging handlers.

    Without an explicit *level* the ``ACUITY_LOG_LEVEL`` setting is used.
    """

    if level is None:
        from ..config import get_settings

        level = get_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("triage_acuity").setLevel(level)
