"""Shared helpers."""

from __future__ import annotations

import logging
import warnings

from mdlv3000.exceptions import UnsupportedConstructWarning

logger = logging.getLogger("mdlv3000")
logger.addHandler(logging.NullHandler())


def warn_unsupported(message: str, stacklevel: int = 3) -> None:
    """Report a skipped construct on both the logger and the warnings channel."""
    logger.warning(message)
    warnings.warn(message, UnsupportedConstructWarning, stacklevel=stacklevel)
